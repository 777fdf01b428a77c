"""Periodic execution of monitoring cycles."""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable

from loguru import logger

Sleep = Callable[[float], Awaitable[None]]


class MonitorScheduler:
    """Runs a cycle coroutine on a fixed interval in a background task.

    A failing cycle is logged and the schedule continues. Cycles started
    here are not coordinated with cycles triggered elsewhere.

    Example:
        scheduler = MonitorScheduler(orchestrator.run, interval=3600)
        scheduler.start()
        ...
        await scheduler.stop()
    """

    def __init__(
        self,
        cycle: Callable[[], Awaitable[object]],
        interval: float,
        *,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        """Initialize scheduler.

        Args:
            cycle: Coroutine function running one cycle.
            interval: Seconds between the end of one cycle and the next.
            sleep: Awaitable used to wait between cycles.
        """
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self._cycle = cycle
        self._interval = interval
        self._sleep = sleep
        self._task: asyncio.Task | None = None
        self.runs = 0

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start the background loop; no-op if already running."""
        if self.running:
            return
        self._task = asyncio.create_task(self._loop(), name="modelwatch-scheduler")
        logger.info(f"Scheduler started (every {self._interval:g}s)")

    async def stop(self) -> None:
        """Cancel the background loop and wait for it to finish."""
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Scheduler stopped")

    async def run_once(self) -> None:
        """Run one scheduled cycle, logging instead of raising on failure."""
        logger.info("Scheduled monitoring started")
        try:
            await self._cycle()
        except Exception:
            logger.exception("Scheduled monitoring failed")
        else:
            logger.info("Scheduled monitoring completed")
        finally:
            self.runs += 1

    async def _loop(self) -> None:
        while True:
            await self.run_once()
            await self._sleep(self._interval)
