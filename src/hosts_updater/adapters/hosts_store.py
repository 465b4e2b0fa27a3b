"""Persistence collaborator: the system hosts file.

Reads the current content, takes timestamped backups and replaces the file
atomically (temporary file in the same directory + `os.replace`), so a
crash mid-write never leaves a truncated hosts file behind.
"""

from __future__ import annotations

import logging
import os
import shutil
import sys
import tempfile
from datetime import datetime
from pathlib import Path

from hosts_updater.core.domain.errors import HostsWriteError
from hosts_updater.core.interfaces.collaborators import HostsStore

logger = logging.getLogger(__name__)

WINDOWS_HOSTS_PATH = Path(r"C:\Windows\System32\drivers\etc\hosts")
POSIX_HOSTS_PATH = Path("/etc/hosts")
DEFAULT_BACKUP_DIR = Path("backup")


def default_hosts_path() -> Path:
    if sys.platform.startswith("win"):
        return WINDOWS_HOSTS_PATH
    return POSIX_HOSTS_PATH


def default_backup_path(now: datetime | None = None) -> Path:
    stamp = (now or datetime.now()).strftime("%Y%m%d_%H%M%S")
    return DEFAULT_BACKUP_DIR / f"hosts.backup.{stamp}"


class HostsFileStore(HostsStore):
    """`HostsStore` backed by a file on disk."""

    def __init__(self, path: Path | None = None) -> None:
        self._path = Path(path) if path is not None else default_hosts_path()

    @property
    def path(self) -> Path:
        return self._path

    def read(self) -> str:
        if not self._path.exists():
            return ""
        try:
            with self._path.open("r", encoding="utf-8", newline="") as handle:
                return handle.read()
        except (OSError, UnicodeDecodeError) as exc:
            raise HostsWriteError(self._path, "read", str(exc)) from exc

    def backup(self, destination: Path | None = None) -> Path | None:
        target = Path(destination) if destination is not None else default_backup_path()
        if not self._path.exists():
            logger.info("Hosts file %s does not exist; nothing to back up", self._path)
            return None
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(self._path, target)
        except OSError as exc:
            raise HostsWriteError(target, "back up hosts file to", str(exc)) from exc
        return target

    def write(self, content: str) -> None:
        directory = self._path.parent
        tmp_name: str | None = None
        try:
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                newline="",
                dir=directory,
                prefix=f".{self._path.name}.",
                suffix=".tmp",
                delete=False,
            ) as handle:
                tmp_name = handle.name
                handle.write(content)
                handle.flush()
                os.fsync(handle.fileno())
            if self._path.exists():
                shutil.copymode(self._path, tmp_name)
            os.replace(tmp_name, self._path)
        except OSError as exc:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise HostsWriteError(self._path, "write", str(exc)) from exc
