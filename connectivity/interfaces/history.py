"""History store interface definitions."""

from abc import ABC, abstractmethod
from collections.abc import Iterator, Mapping
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from connectivity.status import Sample


class ILatencyHistory(ABC):
    """Bounded, insertion-ordered record of timestamp -> latency."""

    @abstractmethod
    def record(self, timestamp: int, latency: int) -> None:
        """Insert or overwrite the entry at timestamp.

        Args:
            timestamp: Epoch milliseconds key
            latency: Latency in milliseconds or FAILURE (-1)

        Overwriting keeps the key's original insertion position.
        """
        pass

    @abstractmethod
    def trim(self) -> None:
        """Evict oldest-inserted entries until size <= capacity."""
        pass

    @abstractmethod
    def snapshot(self) -> Mapping[int, int]:
        """Return a read-only ordered copy of the history.

        Returns:
            Mapping of timestamp -> latency, oldest-inserted first
        """
        pass

    @abstractmethod
    def latest(self) -> Optional["Sample"]:
        """Return the most recently inserted sample, or None if empty."""
        pass

    @abstractmethod
    def values_newest_first(self) -> Iterator[int]:
        """Iterate latencies from newest to oldest insertion."""
        pass

    @abstractmethod
    def __len__(self) -> int:
        pass
