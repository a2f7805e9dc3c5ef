from __future__ import annotations

import asyncio

import pytest

from aqsync.scheduler import PollingScheduler


@pytest.mark.asyncio
async def test_ticks_fire_on_period() -> None:
    ticks: list[int] = []

    async def _tick() -> None:
        ticks.append(len(ticks))

    scheduler = PollingScheduler(_tick, 0.02)
    scheduler.start()
    await asyncio.sleep(0.11)
    await scheduler.stop()

    assert len(ticks) >= 2
    assert scheduler.is_running is False


@pytest.mark.asyncio
async def test_start_is_idempotent() -> None:
    async def _tick() -> None:
        return None

    scheduler = PollingScheduler(_tick, 1.0)
    scheduler.start()
    timer = scheduler._timer  # noqa: SLF001
    scheduler.start()
    assert scheduler._timer is timer  # noqa: SLF001
    await scheduler.stop()


@pytest.mark.asyncio
async def test_restart_resets_the_period() -> None:
    ticks: list[int] = []

    async def _tick() -> None:
        ticks.append(1)

    scheduler = PollingScheduler(_tick, 0.2)
    scheduler.start()
    await asyncio.sleep(0.12)
    scheduler.restart()
    await asyncio.sleep(0.12)

    # 0.24s have elapsed overall, but only 0.12s since the restart.
    assert ticks == []
    await scheduler.stop()


@pytest.mark.asyncio
async def test_ticks_overlap_without_waiting() -> None:
    release = asyncio.Event()
    running = 0
    peak = 0

    async def _slow_tick() -> None:
        nonlocal running, peak
        running += 1
        peak = max(peak, running)
        try:
            await release.wait()
        finally:
            running -= 1

    scheduler = PollingScheduler(_slow_tick, 0.01)
    scheduler.start()
    await asyncio.sleep(0.08)

    assert peak >= 2
    assert scheduler.active_ticks >= 2

    await scheduler.stop()
    assert scheduler.active_ticks == 0
    assert running == 0


@pytest.mark.asyncio
async def test_failing_tick_does_not_stop_the_timer() -> None:
    calls = 0

    async def _tick() -> None:
        nonlocal calls
        calls += 1
        raise RuntimeError("backend down")

    scheduler = PollingScheduler(_tick, 0.01)
    scheduler.start()
    await asyncio.sleep(0.06)

    assert calls >= 2
    assert scheduler.is_running is True
    await scheduler.stop()


def test_rejects_non_positive_period() -> None:
    async def _tick() -> None:
        return None

    with pytest.raises(ValueError):
        PollingScheduler(_tick, 0)
