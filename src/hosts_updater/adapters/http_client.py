"""httpx wrapper.

Why a wrapper:
- One place for timeouts, headers and redirect policy.
- Easier testing: callers receive the client, so a `MockTransport`-backed
  client can stand in for the real one.
"""

from __future__ import annotations

import httpx

from hosts_updater.core.config import AppSettings


def build_async_client(
    settings: AppSettings,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create an `httpx.AsyncClient` with safe defaults.

    One client is built per update cycle and shared by every source fetch.
    """

    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "text/plain,*/*;q=0.8",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )
