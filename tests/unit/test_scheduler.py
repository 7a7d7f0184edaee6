"""Unit tests for the periodic asyncio scheduler."""

import asyncio

import pytest

from connectivity.scheduler import PeriodicScheduler


class CountingJob:
    """Async job counting its runs, optionally blocked on a gate."""

    def __init__(self, gate: asyncio.Event | None = None):
        self.started = 0
        self.finished = 0
        self.gate = gate

    async def __call__(self) -> None:
        self.started += 1
        if self.gate is not None:
            await self.gate.wait()
        self.finished += 1


class TestPeriodicScheduler:
    """Test start/pause/resume semantics."""

    @pytest.mark.asyncio
    async def test_start_runs_immediately(self):
        job = CountingJob()
        scheduler = PeriodicScheduler(job, interval_sec=60.0)

        scheduler.start()
        await scheduler.drain()

        assert job.finished == 1, "First run must not wait for the interval"
        assert scheduler.is_running()
        scheduler.pause()

    @pytest.mark.asyncio
    async def test_fires_every_interval(self):
        job = CountingJob()
        scheduler = PeriodicScheduler(job, interval_sec=0.01)

        scheduler.start()
        await asyncio.sleep(0.1)
        scheduler.pause()
        await scheduler.drain()

        assert job.finished >= 3, f"Expected periodic runs, got {job.finished}"

    @pytest.mark.asyncio
    async def test_pause_stops_future_firings(self):
        job = CountingJob()
        scheduler = PeriodicScheduler(job, interval_sec=0.01)

        scheduler.start()
        scheduler.pause()
        await scheduler.drain()
        runs_at_pause = job.finished

        await asyncio.sleep(0.05)

        assert job.finished == runs_at_pause == 1
        assert not scheduler.is_running()

    @pytest.mark.asyncio
    async def test_resume_runs_immediately(self):
        job = CountingJob()
        scheduler = PeriodicScheduler(job, interval_sec=60.0)

        scheduler.start()
        await scheduler.drain()
        scheduler.pause()
        scheduler.resume()
        await scheduler.drain()

        assert job.finished == 2
        scheduler.pause()

    @pytest.mark.asyncio
    async def test_resume_while_running_restarts(self):
        job = CountingJob()
        scheduler = PeriodicScheduler(job, interval_sec=60.0)

        scheduler.start()
        await scheduler.drain()
        scheduler.resume()
        await scheduler.drain()

        assert job.finished == 2
        assert scheduler.is_running()
        scheduler.pause()
        assert not scheduler.is_running(), "Only one timer should be left to cancel"

    @pytest.mark.asyncio
    async def test_pause_does_not_cancel_in_flight_job(self):
        gate = asyncio.Event()
        job = CountingJob(gate)
        scheduler = PeriodicScheduler(job, interval_sec=60.0)

        scheduler.start()
        await asyncio.sleep(0)
        scheduler.pause()
        assert scheduler.in_flight() == 1

        gate.set()
        await scheduler.drain()

        assert job.finished == 1
        assert scheduler.in_flight() == 0

    @pytest.mark.asyncio
    async def test_jobs_overlap_when_slower_than_interval(self):
        gate = asyncio.Event()
        job = CountingJob(gate)
        scheduler = PeriodicScheduler(job, interval_sec=0.01)

        scheduler.start()
        await asyncio.sleep(0.05)
        scheduler.pause()

        assert job.started >= 2 and job.finished == 0
        gate.set()
        await scheduler.drain()
        assert job.finished == job.started

    @pytest.mark.asyncio
    async def test_reconfigure_restarts_with_new_interval(self):
        job = CountingJob()
        scheduler = PeriodicScheduler(job, interval_sec=60.0)

        scheduler.start()
        await scheduler.drain()
        scheduler.reconfigure(0.01)
        await asyncio.sleep(0.06)
        scheduler.pause()
        await scheduler.drain()

        assert scheduler.interval_sec == 0.01
        assert job.finished >= 3

    @pytest.mark.asyncio
    async def test_start_twice_does_not_double_schedule(self):
        job = CountingJob()
        scheduler = PeriodicScheduler(job, interval_sec=60.0)

        scheduler.start()
        scheduler.start()
        await scheduler.drain()

        assert job.finished == 1
        scheduler.pause()

    @pytest.mark.asyncio
    async def test_failing_job_keeps_schedule_alive(self, caplog):
        async def failing_job():
            raise RuntimeError("probe exploded")

        scheduler = PeriodicScheduler(failing_job, interval_sec=60.0)

        scheduler.start()
        await scheduler.drain()

        assert scheduler.is_running()
        assert any("probe exploded" in r.getMessage() for r in caplog.records)
        scheduler.pause()
