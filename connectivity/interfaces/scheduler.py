"""Scheduler interface definitions."""

from abc import ABC, abstractmethod


class IScheduler(ABC):
    """Fires a job immediately and then on a fixed period."""

    @abstractmethod
    def start(self) -> None:
        """Run the job once now, then every interval."""
        pass

    @abstractmethod
    def pause(self) -> None:
        """Cancel future firings (in-flight jobs keep running)."""
        pass

    @abstractmethod
    def resume(self) -> None:
        """Restart firing, with an immediate run."""
        pass

    @abstractmethod
    def reconfigure(self, interval_sec: float) -> None:
        """Change the period by pausing and resuming.

        Args:
            interval_sec: New period in seconds
        """
        pass

    @abstractmethod
    def is_running(self) -> bool:
        """Check whether future firings are scheduled.

        Returns:
            True if running, False otherwise
        """
        pass

    @abstractmethod
    async def drain(self) -> None:
        """Wait for the jobs in flight at call time to finish."""
        pass
