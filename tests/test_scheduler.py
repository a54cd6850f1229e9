from __future__ import annotations

import asyncio

import pytest

from workers.visitor_monitor.scheduler import IntervalScheduler, SchedulerState


class _CountingJob:
    def __init__(self, duration: float = 0.0) -> None:
        self.calls = 0
        self.running = 0
        self.max_running = 0
        self.duration = duration

    async def __call__(self) -> None:
        self.calls += 1
        self.running += 1
        self.max_running = max(self.max_running, self.running)
        try:
            await asyncio.sleep(self.duration)
        finally:
            self.running -= 1


@pytest.mark.asyncio
@pytest.mark.parametrize("interval", [0, 0.01])
async def test_once_mode_runs_exactly_one_tick(interval: float) -> None:
    job = _CountingJob()
    scheduler = IntervalScheduler(job, interval, once=True)

    assert await scheduler.run() == 1
    assert job.calls == 1
    assert scheduler.state is SchedulerState.STOPPED


@pytest.mark.asyncio
async def test_zero_interval_implies_once() -> None:
    job = _CountingJob()
    scheduler = IntervalScheduler(job, 0)

    assert scheduler.once is True
    assert await scheduler.run() == 1


@pytest.mark.asyncio
async def test_repeating_mode_fires_every_interval() -> None:
    job = _CountingJob()
    scheduler = IntervalScheduler(job, 0.05)

    task = asyncio.create_task(scheduler.run())
    await asyncio.sleep(0.23)
    scheduler.stop()
    ticks = await asyncio.wait_for(task, timeout=1.0)

    assert ticks >= 2
    assert ticks == job.calls


@pytest.mark.asyncio
async def test_first_tick_waits_one_interval() -> None:
    job = _CountingJob()
    scheduler = IntervalScheduler(job, 0.5)

    task = asyncio.create_task(scheduler.run())
    await asyncio.sleep(0.05)

    assert job.calls == 0
    assert scheduler.state is SchedulerState.WAITING

    scheduler.stop()
    assert await asyncio.wait_for(task, timeout=1.0) == 0
    assert scheduler.state is SchedulerState.STOPPED


@pytest.mark.asyncio
async def test_slow_ticks_never_overlap_or_catch_up() -> None:
    loop = asyncio.get_running_loop()
    starts: list[float] = []
    job = _CountingJob(duration=0.12)

    async def timed() -> None:
        starts.append(loop.time())
        await job()

    scheduler = IntervalScheduler(timed, 0.05)

    task = asyncio.create_task(scheduler.run())
    await asyncio.sleep(0.5)
    scheduler.stop()
    await asyncio.wait_for(task, timeout=1.0)

    assert job.max_running == 1
    assert len(starts) >= 2
    # missed periods are dropped: the next start is a full interval after the slow tick
    gaps = [later - earlier for earlier, later in zip(starts, starts[1:])]
    assert min(gaps) >= 0.15


@pytest.mark.asyncio
async def test_stop_lets_running_tick_finish() -> None:
    job = _CountingJob(duration=0.1)
    scheduler = IntervalScheduler(job, 0.01)

    task = asyncio.create_task(scheduler.run())
    await asyncio.sleep(0.05)
    assert scheduler.state is SchedulerState.RUNNING
    scheduler.stop()

    assert await asyncio.wait_for(task, timeout=1.0) == 1
    assert job.running == 0


@pytest.mark.asyncio
async def test_job_errors_propagate_and_stop_the_scheduler() -> None:
    async def boom() -> None:
        raise RuntimeError("tick failed")

    scheduler = IntervalScheduler(boom, 0, once=True)

    with pytest.raises(RuntimeError, match="tick failed"):
        await scheduler.run()
    assert scheduler.state is SchedulerState.STOPPED


def test_negative_interval_is_rejected() -> None:
    with pytest.raises(ValueError):
        IntervalScheduler(_CountingJob(), -1)
