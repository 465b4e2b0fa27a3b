"""Fetch collaborator: downloads hosts documents over HTTP.

Pure I/O. The returned text is not validated here; the update pipeline
runs it through the grammar before it can reach the hosts file.
"""

from __future__ import annotations

import logging

import httpx

from hosts_updater.core.domain.errors import FetchError
from hosts_updater.core.domain.models import SourceDocument
from hosts_updater.core.interfaces.collaborators import DocumentFetcher

logger = logging.getLogger(__name__)


class HttpDocumentFetcher(DocumentFetcher):
    """Fetches source documents with a shared `httpx.AsyncClient`."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def fetch(self, origin: str) -> SourceDocument:
        try:
            resp = await self._client.get(origin)
        except httpx.HTTPError as exc:
            raise FetchError(origin, str(exc) or exc.__class__.__name__) from exc

        if not resp.is_success:
            raise FetchError(origin, f"HTTP status {resp.status_code}")

        logger.debug("Fetched %s (%d bytes)", origin, len(resp.content))
        return SourceDocument(origin=origin, raw_text=resp.text)
