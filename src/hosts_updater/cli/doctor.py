"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio
import json
import os
from pathlib import Path

import httpx
import typer
from rich.console import Console
from rich.table import Table

from hosts_updater.adapters.hosts_store import DEFAULT_BACKUP_DIR, HostsFileStore
from hosts_updater.adapters.http_client import build_async_client
from hosts_updater.adapters.privileges import elevation_hint, is_elevated
from hosts_updater.core.config import AppSettings, find_config_file, get_user_config_dir, load_settings
from hosts_updater.core.domain.errors import HostsUpdaterError
from hosts_updater.core.managed_section import count_markers, is_well_formed

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_sources(settings: AppSettings) -> list[tuple[str, bool, str]]:
    results: list[tuple[str, bool, str]] = []
    async with build_async_client(settings) as client:
        for url in settings.hosts_sources:
            try:
                response = await client.get(url)
            except httpx.HTTPError as exc:
                results.append((url, False, str(exc) or exc.__class__.__name__))
                continue
            results.append((url, response.is_success, f"HTTP {response.status_code}"))
    return results


def _check_target(path: Path) -> tuple[bool, str]:
    if path.exists():
        if os.access(path, os.W_OK):
            return True, "writable"
        return False, "not writable"
    if os.access(path.parent, os.W_OK):
        return True, "will be created"
    return False, f"{path.parent} not writable"


@app.command()
def run(
    config: Path | None = typer.Option(None, "--config", "-c", help="Config file to check."),
    offline: bool = typer.Option(False, "--offline", help="Skip source connectivity checks."),
) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    table = Table(title="hosts-updater Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Privileges
    if is_elevated():
        table.add_row("Privileges", "OK", "running elevated")
    else:
        table.add_row("Privileges", "WARN", elevation_hint())

    # Config
    settings: AppSettings | None = None
    config_path = config or find_config_file()
    try:
        settings = load_settings(config_path)
        table.add_row("Config", "OK", str(config_path))
    except HostsUpdaterError as exc:
        table.add_row("Config", "FAIL", str(exc))

    # Target file
    store = HostsFileStore(settings.hosts_path if settings else None)
    ok_target, detail_target = _check_target(store.path)
    table.add_row("Hosts file", "OK" if ok_target else "FAIL", f"{store.path} ({detail_target})")
    try:
        content = store.read()
        starts, ends = count_markers(content)
        status = "OK" if is_well_formed(content) else "WARN"
        table.add_row("Managed section", status, f"{starts} start / {ends} end marker(s)")
    except HostsUpdaterError as exc:
        table.add_row("Managed section", "FAIL", str(exc))

    if settings and settings.backup_before_update:
        backup_dir = settings.backup_path.parent if settings.backup_path else DEFAULT_BACKUP_DIR
        table.add_row("Backup", "OK", str(backup_dir.resolve()))

    # Connectivity (best-effort)
    if settings and not offline:
        for url, ok, detail in asyncio.run(_check_sources(settings)):
            table.add_row(f"Source {url}", "OK" if ok else "FAIL", detail)

    _console.print(table)


@app.command(name="setup")
def setup() -> None:
    """Interactive setup: writes a config.json to the user config directory."""

    sources: list[str] = []
    while True:
        url = typer.prompt("Hosts source URL (empty to finish)", default="", show_default=False).strip()
        if not url:
            break
        if not url.startswith(("http://", "https://")):
            _console.print("[yellow]Only http:// and https:// URLs are accepted.[/yellow]")
            continue
        sources.append(url)

    if not sources:
        raise typer.BadParameter("at least one source is required")

    interval = typer.prompt("Update interval (hours)", default=2, type=int)
    backup = typer.confirm("Back up the hosts file before each update?", default=True)

    config_path = get_user_config_dir() / "config.json"
    config_path.parent.mkdir(parents=True, exist_ok=True)
    payload = {
        "hosts_sources": sources,
        "update_interval_hours": interval,
        "backup_before_update": backup,
    }
    config_path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")

    _console.print(f"[green]Saved config to:[/green] {config_path}")
