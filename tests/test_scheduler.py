"""Tests for hosts_updater.core.scheduler."""
from __future__ import annotations

import asyncio

import pytest

from hosts_updater.core.domain.errors import FetchError
from hosts_updater.core.scheduler import Scheduler


def test_interval_seconds() -> None:
    assert Scheduler(2).interval_seconds == 7200


def test_rejects_non_positive_interval() -> None:
    with pytest.raises(ValueError):
        Scheduler(0)


def test_runs_immediately_then_sleeps_between_runs() -> None:
    events: list[str] = []

    async def fake_sleep(seconds: float) -> None:
        events.append(f"sleep {seconds:g}")

    async def task() -> None:
        events.append("run")

    runs = asyncio.run(Scheduler(1, sleep=fake_sleep).start(task, max_runs=3))
    assert runs == 3
    assert events == ["run", "sleep 3600", "run", "sleep 3600", "run"]


def test_failed_cycle_does_not_stop_the_loop() -> None:
    calls = 0

    async def fake_sleep(seconds: float) -> None:
        return None

    async def task() -> None:
        nonlocal calls
        calls += 1
        if calls == 1:
            raise FetchError("https://a.example/hosts", "HTTP status 500")

    runs = asyncio.run(Scheduler(1, sleep=fake_sleep).start(task, max_runs=2))
    assert runs == 2
    assert calls == 2
