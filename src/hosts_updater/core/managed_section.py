"""Managed-section codec.

The engine owns exactly one region of the hosts file, delimited by two
literal marker lines. Everything outside the markers belongs to the user
and is passed through untouched.

Layout of the region:

    # >>> hosts_updater_rs START >>>
    # this region is auto-managed; do not edit by hand
    # last updated: 2024-01-15 10:30:00

    # Source: https://example.com/hosts1
    127.0.0.1 localhost

    # <<< hosts_updater_rs END <<<
"""

from __future__ import annotations

from typing import Iterable, Iterator

from hosts_updater.core.domain.models import SourceDocument


START_MARKER = "# >>> hosts_updater_rs START >>>"
END_MARKER = "# <<< hosts_updater_rs END <<<"
DISCLAIMER = "# this region is auto-managed; do not edit by hand"


def _lines_with_ends(content: str) -> Iterator[str]:
    # Split on "\n" only; every other character belongs to the line.
    start = 0
    while start < len(content):
        end = content.find("\n", start)
        if end == -1:
            yield content[start:]
            return
        yield content[start : end + 1]
        start = end + 1


def _is_marker(line: str, marker: str) -> bool:
    return line.strip() == marker


def strip(content: str) -> str:
    """Remove the managed region from `content`.

    Content without a start marker is returned unchanged, trailing
    whitespace included. An unterminated region swallows everything after
    its start marker. Trimming the result is the caller's job.
    """

    kept: list[str] = []
    inside = False
    found_start = False

    for line in _lines_with_ends(content):
        if _is_marker(line, START_MARKER):
            inside = True
            found_start = True
            continue
        if _is_marker(line, END_MARKER):
            inside = False
            continue
        if not inside:
            kept.append(line)

    if not found_start:
        return content
    return "".join(kept)


def render(documents: Iterable[SourceDocument], timestamp: str) -> str:
    """Render a fresh managed region; documents keep the order given."""

    parts = [
        START_MARKER,
        "\n",
        DISCLAIMER,
        "\n",
        f"# last updated: {timestamp}",
        "\n\n",
    ]
    for doc in documents:
        parts.append(f"# Source: {doc.origin}\n")
        parts.append(doc.raw_text.strip())
        parts.append("\n\n")
    parts.append(END_MARKER)
    parts.append("\n")
    return "".join(parts)


def count_markers(content: str) -> tuple[int, int]:
    """(start markers, end markers) found in `content`."""

    starts = ends = 0
    for line in _lines_with_ends(content):
        if _is_marker(line, START_MARKER):
            starts += 1
        elif _is_marker(line, END_MARKER):
            ends += 1
    return starts, ends


def count_regions(content: str) -> int:
    """Number of start markers in `content` (0 or 1 for engine output)."""

    return count_markers(content)[0]


def is_well_formed(content: str) -> bool:
    """At most one region, with matching start and end markers."""

    starts, ends = count_markers(content)
    return starts == ends and starts <= 1
