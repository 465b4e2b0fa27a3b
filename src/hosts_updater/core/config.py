"""Configuration.

Why here:
- Centralizes settings (pydantic-settings) without polluting the CLI.
- Adapters (HTTP, hosts store) read the same typed contract.

Sources, highest priority first: `HOSTS_UPDATER_*` environment variables,
then the first configuration file found (JSON, TOML or YAML), then the
defaults below.
"""

from __future__ import annotations

import json
import os
import sys
import tomllib
from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from hosts_updater.core.domain.errors import ConfigError


CONFIG_FORMATS: tuple[str, ...] = ("json", "toml", "yaml")
SYSTEM_CONFIG_BASE = Path("/etc/hosts_updater/config")


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "hosts_updater"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "hosts_updater"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "hosts_updater"
    return Path.home() / ".config" / "hosts_updater"


class AppSettings(BaseSettings):
    """Central application settings."""

    model_config = SettingsConfigDict(
        env_prefix="HOSTS_UPDATER_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    hosts_sources: list[str] = Field(
        ...,
        description="Ordered list of source URLs (http/https).",
    )
    update_interval_hours: int = Field(
        default=2,
        gt=0,
        description="Hours between two update cycles.",
    )
    backup_before_update: bool = Field(
        default=True,
        description="Copy the hosts file aside before each write.",
    )
    backup_path: Path | None = Field(
        default=None,
        description="Backup file; defaults to ./backup/hosts.backup.<timestamp>.",
    )
    hosts_path: Path | None = Field(
        default=None,
        description="Target hosts file; defaults to the platform's system file.",
    )
    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout per request (seconds).",
    )
    user_agent: str = Field(
        default="hosts-updater/0.1",
        min_length=1,
        description="User-Agent sent to sources.",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level name (DEBUG, INFO, WARNING, ...).",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        # Environment beats values read from the config file (passed as init kwargs).
        return env_settings, dotenv_settings, init_settings, file_secret_settings

    @field_validator("hosts_sources")
    @classmethod
    def _check_sources(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("hosts_sources must not be empty")
        for url in value:
            if not url.startswith(("http://", "https://")):
                raise ValueError(f"invalid URL: {url}")
        return value

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        return value.strip().upper()


def candidate_config_bases() -> list[Path]:
    """Base paths (without extension) searched for a config file, in order."""

    return [
        Path.cwd() / "config",
        get_user_config_dir() / "config",
        SYSTEM_CONFIG_BASE,
    ]


def find_config_file(bases: list[Path] | None = None) -> Path | None:
    for base in bases if bases is not None else candidate_config_bases():
        for fmt in CONFIG_FORMATS:
            candidate = base.with_name(f"{base.name}.{fmt}")
            if candidate.is_file():
                return candidate
    return None


def load_config_file(path: Path) -> dict[str, Any]:
    """Parse a JSON/TOML/YAML config file into a mapping."""

    suffix = path.suffix.lower().lstrip(".")
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"cannot read configuration file {path}: {exc}") from exc

    try:
        if suffix == "json":
            data = json.loads(text)
        elif suffix == "toml":
            data = tomllib.loads(text)
        elif suffix in ("yaml", "yml"):
            data = yaml.safe_load(text)
        else:
            raise ConfigError(f"unsupported configuration format: {path}")
    except (json.JSONDecodeError, tomllib.TOMLDecodeError, yaml.YAMLError) as exc:
        raise ConfigError(f"cannot parse configuration file {path}: {exc}") from exc

    if not isinstance(data, Mapping):
        raise ConfigError(f"configuration file {path} must contain a mapping at the root")
    return dict(data)


def load_settings(path: Path | None = None) -> AppSettings:
    """Build `AppSettings` from an explicit file or the first one discovered."""

    config_path = path or find_config_file()
    if config_path is None:
        raise ConfigError("no configuration file found")

    values = load_config_file(config_path)
    try:
        return AppSettings(**values)
    except ValidationError as exc:
        raise ConfigError(f"invalid configuration in {config_path}: {exc}") from exc
