"""Merge of accepted documents into existing hosts content.

Pure: the caller reads the current file and persists the result.
"""

from __future__ import annotations

from typing import Sequence

from hosts_updater.core import managed_section
from hosts_updater.core.domain.models import SourceDocument


def trim_trailing(text: str) -> str:
    return text.rstrip()


def merge(existing_content: str, documents: Sequence[SourceDocument], timestamp: str) -> str:
    """Replace the managed region of `existing_content` with a fresh one.

    Documents must already have passed `validate_document`. An empty
    `documents` still yields markers, disclaimer and timestamp.
    """

    stripped = trim_trailing(managed_section.strip(existing_content))
    section = managed_section.render(documents, timestamp)
    if not stripped:
        return section
    return f"{stripped}\n\n{section}"
