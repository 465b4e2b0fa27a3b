"""Domain models (Pydantic v2).

These models describe *what* flows through an update cycle, not *how* it
is obtained: a parsed host record, one fetched source document and the
summary of a completed run.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class Record(BaseModel):
    """One validated `<address> <name>[ <name>...]` line."""

    model_config = ConfigDict(frozen=True)

    address: str = Field(
        ...,
        min_length=1,
        description="IPv4 dotted-quad or IPv6 address (optionally bracketed).",
    )
    names: tuple[str, ...] = Field(
        ...,
        min_length=1,
        description="Hostnames mapped to the address, in line order.",
    )


class SourceDocument(BaseModel):
    """Raw text returned by one configured source, before validation.

    The text is kept verbatim: once accepted it is copied into the managed
    section as-is, never re-serialized from parsed records.
    """

    model_config = ConfigDict(frozen=True)

    origin: str = Field(
        ...,
        description="Identifier of the source (typically its URL or file path).",
    )
    raw_text: str = Field(
        ...,
        description="Document body exactly as the source returned it.",
    )


class UpdateReport(BaseModel):
    """Outcome of a single update cycle."""

    hosts_path: Path = Field(
        ...,
        description="Target hosts file of the cycle.",
    )
    origins: list[str] = Field(
        default_factory=list,
        description="Sources whose documents made it into the managed section.",
    )
    timestamp: str = Field(
        ...,
        description="Value written on the 'last updated' line.",
    )
    backup_path: Path | None = Field(
        default=None,
        description="Backup copy taken before writing (if enabled).",
    )
    bytes_before: int = Field(
        default=0,
        ge=0,
        description="Size of the hosts file before the update.",
    )
    bytes_after: int = Field(
        default=0,
        ge=0,
        description="Size of the merged content.",
    )
    written: bool = Field(
        default=True,
        description="False for dry runs, where the merged content is only returned.",
    )
    content: str = Field(
        default="",
        description="Merged content produced by the cycle.",
    )
    finished_at: datetime = Field(
        default_factory=datetime.now,
        description="Local time the cycle completed.",
    )
