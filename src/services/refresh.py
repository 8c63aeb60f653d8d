"""
Periodic re-evaluation contract.

A host re-invokes the engine every K seconds. Each tick is independent; the
only control is a single handle whose cancel() stops further ticks.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from src.utils.config import age_timer_interval_seconds, countdown_interval_seconds
from src.utils.logger import get_logger

logger = get_logger()


@dataclass(frozen=True)
class RefreshSchedule:
    interval_seconds: float

    def __post_init__(self) -> None:
        if self.interval_seconds <= 0:
            raise ValueError(f"interval_seconds must be positive, got {self.interval_seconds}")


AGE_TIMER_SCHEDULE = RefreshSchedule(1)
COUNTDOWN_SCHEDULE = RefreshSchedule(60)


def age_timer_schedule() -> RefreshSchedule:
    """Live counter schedule, overridable via AGE_TIMER_INTERVAL_SECONDS."""
    return RefreshSchedule(age_timer_interval_seconds())


def countdown_schedule() -> RefreshSchedule:
    """Countdown schedule, overridable via COUNTDOWN_INTERVAL_SECONDS."""
    return RefreshSchedule(countdown_interval_seconds())


class TickHandle:
    """Teardown handle returned by Ticker.start()."""

    def __init__(self, stop: threading.Event, thread: threading.Thread) -> None:
        self._stop = stop
        self._thread = thread

    @property
    def cancelled(self) -> bool:
        return self._stop.is_set()

    @property
    def running(self) -> bool:
        return self._thread.is_alive()

    def cancel(self, timeout: float | None = None) -> None:
        """Stop issuing ticks. Safe to call more than once."""
        self._stop.set()
        if self._thread is not threading.current_thread():
            self._thread.join(timeout)

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the ticker stops. Returns True if it has stopped."""
        self._thread.join(timeout)
        return not self._thread.is_alive()


class Ticker:
    """
    Call a function with a fresh "now" on a fixed schedule.

    The first tick fires immediately. A tick that raises is logged and ends
    the ticker. max_ticks bounds the run (None = until cancelled).
    """

    def __init__(
        self,
        schedule: RefreshSchedule,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.schedule = schedule
        self._clock = clock

    def _run(self, fn: Callable[[datetime], None], stop: threading.Event, max_ticks: int | None) -> None:
        count = 0
        while not stop.is_set():
            try:
                fn(self._clock())
            except Exception as e:
                logger.exception("Tick failed, stopping ticker: %s", e)
                stop.set()
                return
            count += 1
            if max_ticks is not None and count >= max_ticks:
                stop.set()
                return
            stop.wait(self.schedule.interval_seconds)

    def start(self, fn: Callable[[datetime], None], max_ticks: int | None = None) -> TickHandle:
        stop = threading.Event()
        thread = threading.Thread(
            target=self._run,
            args=(fn, stop, max_ticks),
            name="life-tracker-ticker",
            daemon=True,
        )
        thread.start()
        logger.debug("Ticker started every %.1fs", self.schedule.interval_seconds)
        return TickHandle(stop, thread)
