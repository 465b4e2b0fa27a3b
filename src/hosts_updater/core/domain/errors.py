"""Error taxonomy.

Validation errors are terminal for the document that produced them; the
caller decides whether one bad document aborts the whole run.
"""

from __future__ import annotations

from pathlib import Path


class HostsUpdaterError(Exception):
    """Base class for every error raised by hosts-updater."""


class HostsValidationError(HostsUpdaterError):
    """A fetched document (or one of its lines) is not a valid hosts document."""


class EmptyDocumentError(HostsValidationError):
    def __init__(self, origin: str | None = None) -> None:
        self.origin = origin
        where = f": {origin}" if origin else ""
        super().__init__(f"document is empty{where}")


class IllegalControlCharacterError(HostsValidationError):
    def __init__(self, offset: int, char: str, origin: str | None = None) -> None:
        self.offset = offset
        self.char = char
        self.origin = origin
        where = f" ({origin})" if origin else ""
        super().__init__(
            f"illegal control character {char!r} at offset {offset}{where}"
        )


class MissingFieldError(HostsValidationError):
    def __init__(self, line: str) -> None:
        self.line = line
        super().__init__(f"missing address or hostname: {line!r}")


class ReservedMarkerError(HostsValidationError):
    """A document line equals one of the managed-section marker lines."""

    def __init__(self, marker: str) -> None:
        self.marker = marker
        super().__init__(f"line is a reserved managed-section marker: {marker!r}")


class InvalidAddressError(HostsValidationError):
    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f"invalid address: {token!r}")


class InvalidNameError(HostsValidationError):
    def __init__(self, token: str, label: str) -> None:
        self.token = token
        self.label = label
        super().__init__(f"invalid hostname {token!r} (label {label!r})")


class LineValidationError(HostsValidationError):
    """Wraps a line-level error with its position and source."""

    def __init__(self, line_no: int, text: str, origin: str, reason: HostsValidationError) -> None:
        self.line_no = line_no
        self.text = text
        self.origin = origin
        self.reason = reason
        super().__init__(f"line {line_no}: {reason} (source: {origin})")


class FetchError(HostsUpdaterError):
    """A source could not be retrieved (transport error or non-success status)."""

    def __init__(self, origin: str, reason: str) -> None:
        self.origin = origin
        self.reason = reason
        super().__init__(f"failed to fetch {origin}: {reason}")


class ConfigError(HostsUpdaterError):
    """Configuration is missing, unreadable or invalid."""


class HostsWriteError(HostsUpdaterError):
    """Reading, backing up or writing the hosts file failed."""

    def __init__(self, path: Path, action: str, reason: str) -> None:
        self.path = path
        self.action = action
        super().__init__(f"failed to {action} {path}: {reason}")
