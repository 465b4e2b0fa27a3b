"""Periodic execution of the update cycle."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable

from hosts_updater.core.domain.errors import HostsUpdaterError

logger = logging.getLogger(__name__)

SECONDS_PER_HOUR = 3600


class Scheduler:
    """Runs a task immediately, then once per interval.

    A failing cycle is logged and the loop carries on; cycles never overlap
    because each one is awaited before the next sleep starts.
    """

    def __init__(
        self,
        interval_hours: float,
        *,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if interval_hours <= 0:
            raise ValueError("interval_hours must be positive")
        self.interval_hours = interval_hours
        self._sleep = sleep

    @property
    def interval_seconds(self) -> float:
        return self.interval_hours * SECONDS_PER_HOUR

    async def start(
        self,
        task: Callable[[], Awaitable[object]],
        *,
        max_runs: int | None = None,
    ) -> int:
        """Loop forever (or `max_runs` times); return the number of runs."""

        logger.info("Scheduler started, interval: %s hour(s)", self.interval_hours)
        runs = 0
        while max_runs is None or runs < max_runs:
            if runs:
                await self._sleep(self.interval_seconds)
            try:
                await task()
            except HostsUpdaterError as exc:
                logger.error("Hosts update failed: %s", exc)
            runs += 1
        return runs
