"""
Fixed-period scheduler.

Fires ``job`` at ``t, 2t, 3t, ...`` after start (never at ``t=0``).
Ticks never overlap: a slow tick pushes the next one back and missed
periods are dropped rather than replayed.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from enum import StrEnum

logger = logging.getLogger(__name__)


class SchedulerState(StrEnum):
    IDLE = "IDLE"
    WAITING = "WAITING"
    RUNNING = "RUNNING"
    STOPPED = "STOPPED"


class IntervalScheduler:
    """
    Drives a repeating or single-shot loop.

    An interval of 0 means "run once", matching the CLI convention.
    ``stop()`` cancels a pending wait but lets a running tick finish.
    """

    def __init__(
        self,
        job: Callable[[], Awaitable[object]],
        interval: float,
        *,
        once: bool = False,
    ) -> None:
        if interval < 0:
            raise ValueError("interval must be >= 0")
        self._job = job
        self.interval = interval
        self.once = once or interval == 0
        self.state = SchedulerState.IDLE
        self.ticks = 0
        self._stop_requested = asyncio.Event()

    def stop(self) -> None:
        self._stop_requested.set()

    async def _wait(self, delay: float) -> bool:
        """Sleep ``delay`` seconds; True if a stop was requested meanwhile."""
        try:
            await asyncio.wait_for(self._stop_requested.wait(), timeout=delay)
        except TimeoutError:
            return False
        return True

    async def run(self) -> int:
        """Run until once-mode completes or stop() is called; returns tick count."""
        loop = asyncio.get_running_loop()
        next_fire = loop.time() + self.interval
        mode = "once" if self.once else f"every {self.interval:g}s"
        logger.info("Scheduler started (%s)", mode)

        try:
            while not self._stop_requested.is_set():
                self.state = SchedulerState.WAITING
                if await self._wait(max(0.0, next_fire - loop.time())):
                    break

                self.state = SchedulerState.RUNNING
                await self._job()
                self.ticks += 1

                if self.once:
                    break

                now = loop.time()
                next_fire += self.interval
                if next_fire <= now:
                    skipped = int((now - next_fire) // self.interval) + 1
                    logger.warning("Tick overran the interval, skipping %d period(s)", skipped)
                    next_fire = now + self.interval
        finally:
            self.state = SchedulerState.STOPPED
            logger.info("Scheduler stopped after %d tick(s)", self.ticks)

        return self.ticks
