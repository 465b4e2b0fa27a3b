"""Hosts-file grammar.

Two gatekeepers stand between fetched text and the system hosts file:

- `validate_line` accepts one `<address> <name>[ <name>...]` record.
- `validate_document` applies it to every logical line of a document and
  accepts or rejects the document as a whole.

Accepted documents are not re-serialized: the caller keeps the raw text and
copies it verbatim into the managed section.
"""

from __future__ import annotations

import ipaddress
import re
import unicodedata
from typing import Iterator

from hosts_updater.core.domain.errors import (
    EmptyDocumentError,
    HostsValidationError,
    IllegalControlCharacterError,
    InvalidAddressError,
    InvalidNameError,
    LineValidationError,
    MissingFieldError,
    ReservedMarkerError,
)
from hosts_updater.core.domain.models import Record, SourceDocument
from hosts_updater.core.managed_section import END_MARKER, START_MARKER


MAX_NAME_LENGTH = 253
MAX_LABEL_LENGTH = 63

_LABEL_RE = re.compile(r"[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?")
_ALLOWED_CONTROL = frozenset("\n\r\t")


def is_comment_or_blank(line: str) -> bool:
    """True for lines that carry no record (blank or `#` comments)."""

    stripped = line.strip()
    return not stripped or stripped.startswith("#")


def is_valid_address(token: str) -> bool:
    """IPv4 dotted-quad, bare IPv6 or bracketed IPv6."""

    try:
        ipaddress.IPv4Address(token)
        return True
    except ValueError:
        pass

    if token.startswith("[") and token.endswith("]"):
        token = token[1:-1]
    # Scoped addresses (fe80::1%eth0) are not valid in a hosts file.
    if "%" in token:
        return False
    try:
        ipaddress.IPv6Address(token)
        return True
    except ValueError:
        return False


def find_invalid_label(name: str) -> str | None:
    """Return the first offending label of `name`, or None if it is valid.

    The whole name is returned when the total length is the problem.
    """

    if not name:
        return ""
    if len(name) > MAX_NAME_LENGTH:
        return name
    for label in name.split("."):
        if len(label) > MAX_LABEL_LENGTH or not _LABEL_RE.fullmatch(label):
            return label
    return None


def is_valid_name(name: str) -> bool:
    return find_invalid_label(name) is None


def validate_line(line: str) -> Record:
    """Parse one non-blank, non-comment line into a `Record`.

    Raises `MissingFieldError`, `InvalidAddressError` or `InvalidNameError`.
    """

    tokens = line.split()
    if len(tokens) < 2:
        raise MissingFieldError(line.strip())

    address, *names = tokens
    if not is_valid_address(address):
        raise InvalidAddressError(address)

    for name in names:
        label = find_invalid_label(name)
        if label is not None:
            raise InvalidNameError(name, label)

    return Record(address=address, names=tuple(names))


def _check_control_characters(text: str, origin: str) -> None:
    for offset, ch in enumerate(text):
        if ch in _ALLOWED_CONTROL:
            continue
        if unicodedata.category(ch) == "Cc":
            raise IllegalControlCharacterError(offset, ch, origin)


def validate_document(doc: SourceDocument) -> None:
    """Accept or reject a whole document; never partially.

    Raises `EmptyDocumentError`, `IllegalControlCharacterError` or
    `LineValidationError` (first failing line, 1-based, with the line error
    chained as its cause). Lines equal to a managed-section marker are
    rejected with `ReservedMarkerError` as the cause.
    """

    text = doc.raw_text
    if not text.strip():
        raise EmptyDocumentError(doc.origin)

    _check_control_characters(text, doc.origin)

    for line_no, line in enumerate(text.split("\n"), start=1):
        stripped = line.strip()
        if stripped in (START_MARKER, END_MARKER):
            # A marker inside the section would end it early on the next strip.
            exc = ReservedMarkerError(stripped)
            raise LineValidationError(line_no, stripped, doc.origin, exc) from exc
        if is_comment_or_blank(line):
            continue
        try:
            validate_line(line)
        except HostsValidationError as exc:
            raise LineValidationError(line_no, line.strip(), doc.origin, exc) from exc


def iter_records(doc: SourceDocument) -> Iterator[Record]:
    """Yield the records of an already validated document."""

    for line in doc.raw_text.split("\n"):
        if not is_comment_or_blank(line):
            yield validate_line(line)
