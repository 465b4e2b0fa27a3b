from __future__ import annotations

from pathlib import Path

import pytest

from hosts_updater.core.domain.models import SourceDocument


class FakeFetcher:
    """In-memory `DocumentFetcher`: origin -> text, or an exception to raise."""

    def __init__(self, responses: dict[str, str | Exception]) -> None:
        self.responses = responses
        self.calls: list[str] = []

    async def fetch(self, origin: str) -> SourceDocument:
        self.calls.append(origin)
        value = self.responses[origin]
        if isinstance(value, Exception):
            raise value
        return SourceDocument(origin=origin, raw_text=value)


class MemoryStore:
    """In-memory `HostsStore`."""

    def __init__(self, content: str = "", path: Path = Path("/tmp/hosts-test")) -> None:
        self.content = content
        self._path = path
        self.backups: list[Path | None] = []
        self.writes: list[str] = []

    @property
    def path(self) -> Path:
        return self._path

    def read(self) -> str:
        return self.content

    def backup(self, destination: Path | None = None) -> Path:
        self.backups.append(destination)
        return destination or Path("backup/hosts.backup.test")

    def write(self, content: str) -> None:
        self.writes.append(content)
        self.content = content


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for key in (
        "HOSTS_UPDATER_HOSTS_SOURCES",
        "HOSTS_UPDATER_UPDATE_INTERVAL_HOURS",
        "HOSTS_UPDATER_BACKUP_BEFORE_UPDATE",
        "HOSTS_UPDATER_BACKUP_PATH",
        "HOSTS_UPDATER_HOSTS_PATH",
        "HOSTS_UPDATER_LOG_LEVEL",
    ):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.chdir(tmp_path)
