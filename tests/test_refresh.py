"""
Tests for refresh scheduling: schedules, ticking, cancellation and failures.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime

import pytest

from src.services.refresh import (
    AGE_TIMER_SCHEDULE,
    COUNTDOWN_SCHEDULE,
    RefreshSchedule,
    Ticker,
    age_timer_schedule,
    countdown_schedule,
)

FIXED = datetime(2024, 3, 15, 10, 30, 45)


def test_default_schedules() -> None:
    assert AGE_TIMER_SCHEDULE.interval_seconds == 1
    assert COUNTDOWN_SCHEDULE.interval_seconds == 60


def test_schedules_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AGE_TIMER_INTERVAL_SECONDS", "5")
    monkeypatch.setenv("COUNTDOWN_INTERVAL_SECONDS", "not-a-number")
    assert age_timer_schedule().interval_seconds == 5
    assert countdown_schedule().interval_seconds == 60


def test_schedule_rejects_non_positive() -> None:
    with pytest.raises(ValueError):
        RefreshSchedule(0)


def test_ticker_runs_max_ticks_with_clock() -> None:
    seen: list[datetime] = []
    handle = Ticker(RefreshSchedule(0.01), clock=lambda: FIXED).start(seen.append, max_ticks=3)
    assert handle.wait(timeout=5)
    assert seen == [FIXED, FIXED, FIXED]
    assert handle.cancelled


def test_ticker_cancel_stops_ticks() -> None:
    first = threading.Event()
    calls: list[datetime] = []

    def tick(now: datetime) -> None:
        calls.append(now)
        first.set()

    handle = Ticker(RefreshSchedule(10)).start(tick)
    assert first.wait(timeout=5)
    handle.cancel(timeout=5)
    handle.cancel(timeout=5)
    assert not handle.running
    assert len(calls) == 1


def test_ticker_stops_on_error(caplog: pytest.LogCaptureFixture) -> None:
    def boom(now: datetime) -> None:
        raise RuntimeError("render failed")

    with caplog.at_level(logging.ERROR):
        handle = Ticker(RefreshSchedule(0.01)).start(boom)
        assert handle.wait(timeout=5)
    assert "Tick failed" in caplog.text
