"""Periodic background refresh timer."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Awaitable, Callable

_logger = logging.getLogger(__name__)


class PollingScheduler:
    """One repeating timer firing *tick* every *period* seconds.

    Ticks are started on the wall-clock period without waiting for the
    previous tick to finish, so ticks may overlap. :meth:`restart` tears
    the timer down and starts a fresh period; ticks already running are
    left to finish.
    """

    def __init__(self, tick: Callable[[], Awaitable[None]], period: float) -> None:
        if period <= 0:
            raise ValueError(f"period must be positive, got {period}")
        self._tick = tick
        self._period = period
        self._timer: asyncio.Task[None] | None = None
        self._ticks: set[asyncio.Task[None]] = set()

    @property
    def period(self) -> float:
        return self._period

    @property
    def is_running(self) -> bool:
        return self._timer is not None and not self._timer.done()

    @property
    def active_ticks(self) -> int:
        return len(self._ticks)

    def start(self) -> None:
        if self.is_running:
            return
        self._timer = asyncio.get_running_loop().create_task(self._run(), name="aqsync-poll-timer")

    def restart(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        _logger.debug("Poll timer reset (period=%ss)", self._period)
        self.start()

    async def stop(self) -> None:
        """Cancel the timer and any tick still running."""
        timer = self._timer
        self._timer = None
        tasks = list(self._ticks)
        if timer is not None:
            tasks.append(timer)
        for task in tasks:
            task.cancel()
        for task in tasks:
            with contextlib.suppress(asyncio.CancelledError):
                await task
        self._ticks.clear()

    async def _run(self) -> None:
        loop = asyncio.get_running_loop()
        while True:
            await asyncio.sleep(self._period)
            task = loop.create_task(self._run_tick(), name="aqsync-poll-tick")
            self._ticks.add(task)
            task.add_done_callback(self._ticks.discard)

    async def _run_tick(self) -> None:
        try:
            await self._tick()
        except Exception:
            _logger.warning("Background refresh tick failed", exc_info=True)
