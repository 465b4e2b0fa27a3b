"""Update cycle orchestration.

One cycle: fetch every configured source in order, validate each document
as a whole, merge the accepted documents into the current hosts content and
hand the result to the store. The first fetch or validation failure aborts
the cycle before the hosts file is touched.

`run_once` is stateless: the HTTP fetcher and the store are passed in, so
the scheduler, the CLI and the tests all drive the same code path.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Sequence

import httpx

from hosts_updater.adapters.hosts_fetcher import HttpDocumentFetcher
from hosts_updater.adapters.hosts_store import HostsFileStore
from hosts_updater.adapters.http_client import build_async_client
from hosts_updater.core.config import AppSettings
from hosts_updater.core.domain.errors import HostsUpdaterError
from hosts_updater.core.domain.models import SourceDocument, UpdateReport
from hosts_updater.core.hosts_grammar import validate_document
from hosts_updater.core.interfaces.collaborators import DocumentFetcher, HostsStore
from hosts_updater.core.merge import merge

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass
class UpdateHooks:
    """Optional callbacks for UI layers (progress)."""

    source_fetched: Callable[[SourceDocument], None] | None = None
    source_failed: Callable[[str, HostsUpdaterError], None] | None = None


def format_timestamp(now: datetime | None = None) -> str:
    return (now or datetime.now()).strftime(TIMESTAMP_FORMAT)


async def collect_documents(
    *,
    origins: Sequence[str],
    fetcher: DocumentFetcher,
    hooks: UpdateHooks | None = None,
) -> list[SourceDocument]:
    """Fetch and validate every source in order; raise on the first failure."""

    hooks = hooks or UpdateHooks()
    documents: list[SourceDocument] = []
    for origin in origins:
        try:
            doc = await fetcher.fetch(origin)
            validate_document(doc)
        except HostsUpdaterError as exc:
            logger.error("Failed to get hosts content from %s: %s", origin, exc)
            if hooks.source_failed:
                hooks.source_failed(origin, exc)
            raise
        logger.info("Fetched hosts content from %s", origin)
        if hooks.source_fetched:
            hooks.source_fetched(doc)
        documents.append(doc)
    return documents


async def run_once(
    *,
    settings: AppSettings,
    fetcher: DocumentFetcher,
    store: HostsStore,
    now: datetime | None = None,
    dry_run: bool = False,
    hooks: UpdateHooks | None = None,
) -> UpdateReport:
    """Run a single update cycle and report what was written."""

    logger.info("Updating hosts file %s", store.path)
    logger.info("Fetching hosts from %d source(s)...", len(settings.hosts_sources))
    documents = await collect_documents(
        origins=settings.hosts_sources,
        fetcher=fetcher,
        hooks=hooks,
    )
    logger.info("Fetched %d source(s)", len(documents))

    current = store.read()
    logger.info("Current hosts file size: %d bytes", len(current.encode("utf-8")))

    timestamp = format_timestamp(now)
    merged = merge(current, documents, timestamp)

    report = UpdateReport(
        hosts_path=store.path,
        origins=[doc.origin for doc in documents],
        timestamp=timestamp,
        bytes_before=len(current.encode("utf-8")),
        bytes_after=len(merged.encode("utf-8")),
        written=not dry_run,
        content=merged,
    )
    if dry_run:
        logger.info("Dry run: hosts file left untouched")
        return report

    if settings.backup_before_update:
        report.backup_path = store.backup(settings.backup_path)
        if report.backup_path is not None:
            logger.info("Backed up hosts file to %s", report.backup_path)

    store.write(merged)
    logger.info("Hosts file updated")
    return report


async def run_update(
    *,
    settings: AppSettings,
    dry_run: bool = False,
    hooks: UpdateHooks | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> UpdateReport:
    """Wire the real adapters for one cycle (one shared HTTP client)."""

    store = HostsFileStore(settings.hosts_path)
    async with build_async_client(settings, transport=transport) as client:
        return await run_once(
            settings=settings,
            fetcher=HttpDocumentFetcher(client),
            store=store,
            dry_run=dry_run,
            hooks=hooks,
        )
