"""Periodic asyncio scheduler driving latency probes.

The timer loop spawns each job as its own task, so a slow job never delays
the next firing. Jobs may therefore overlap when one outlives the interval.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Optional

from connectivity.interfaces.scheduler import IScheduler

logger = logging.getLogger(__name__)


class PeriodicScheduler(IScheduler):
    """Runs a coroutine job immediately on start, then every interval."""

    def __init__(self, job: Callable[[], Awaitable[None]], interval_sec: float):
        """Initialize scheduler.

        Args:
            job: Coroutine function run on every firing
            interval_sec: Period between firings in seconds
        """
        self.job = job
        self.interval_sec = interval_sec
        self._timer_task: Optional[asyncio.Task] = None
        self._in_flight: set[asyncio.Task] = set()

    def start(self) -> None:
        """Run the job once now, then every interval.

        Must be called from a running event loop.
        """
        if self.is_running():
            logger.warning("Scheduler already running")
            return

        self._spawn_job()
        self._timer_task = asyncio.get_running_loop().create_task(self._timer_loop())
        logger.info(f"Scheduler started (interval={self.interval_sec:.3f}s)")

    async def _timer_loop(self) -> None:
        """Internal timer loop."""
        try:
            while True:
                await asyncio.sleep(self.interval_sec)
                self._spawn_job()
        except asyncio.CancelledError:
            logger.debug("Scheduler timer cancelled")
            raise

    def _spawn_job(self) -> None:
        task = asyncio.get_running_loop().create_task(self._run_job())
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)

    async def _run_job(self) -> None:
        try:
            await self.job()
        except Exception as e:
            logger.error(f"Scheduled job failed: {e}", exc_info=True)

    def pause(self) -> None:
        """Cancel future firings; in-flight jobs keep running."""
        if self._timer_task is not None:
            self._timer_task.cancel()
            self._timer_task = None
            logger.info("Scheduler paused")

    def resume(self) -> None:
        """Restart firing, with an immediate run.

        A running schedule is restarted, so its timer is replaced.
        """
        self.pause()
        self.start()

    def reconfigure(self, interval_sec: float) -> None:
        """Change the period by pausing and resuming.

        Args:
            interval_sec: New period in seconds
        """
        self.interval_sec = interval_sec
        self.resume()

    def is_running(self) -> bool:
        """Check whether future firings are scheduled.

        Returns:
            True if running, False otherwise
        """
        return self._timer_task is not None and not self._timer_task.done()

    def in_flight(self) -> int:
        """Number of jobs currently executing."""
        return len(self._in_flight)

    async def drain(self) -> None:
        """Wait for the jobs in flight at call time to finish."""
        if self._in_flight:
            await asyncio.gather(*list(self._in_flight), return_exceptions=True)
