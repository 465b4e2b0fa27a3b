"""Contracts for the update pipeline's collaborators.

Why Protocol:
- Structural typing, no rigid inheritance.
- The pipeline can be driven by in-memory fakes in tests while the real
  adapters talk to the network and the filesystem.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from hosts_updater.core.domain.models import SourceDocument


@runtime_checkable
class DocumentFetcher(Protocol):
    """Retrieves one source document.

    Rules:
    - `fetch` is async because it typically performs HTTP.
    - Network-level failures (non-success status included) raise
      `FetchError`; the returned text is not validated yet.
    """

    async def fetch(self, origin: str) -> SourceDocument:
        ...


@runtime_checkable
class HostsStore(Protocol):
    """Reads and persists the target hosts file."""

    @property
    def path(self) -> Path:
        ...

    def read(self) -> str:
        """Current content; an absent file reads as empty."""

        ...

    def backup(self, destination: Path | None = None) -> Path | None:
        """Copy the current file aside; return the copy's path, or None if
        there was no file to copy.
        """

        ...

    def write(self, content: str) -> None:
        """Replace the file content atomically."""

        ...
