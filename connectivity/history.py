"""Bounded latency history keyed by timestamp.

Entries are kept in insertion order with an explicit key queue, so eviction
always removes the oldest-inserted key regardless of timestamp order.
"""

import logging
from collections import deque
from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Optional

from connectivity.interfaces.history import ILatencyHistory
from connectivity.status import FAILURE, Sample

logger = logging.getLogger(__name__)


class LatencyHistory(ILatencyHistory):
    """Insertion-ordered latency history with a fixed capacity.

    Not thread-safe: mutate only from the monitor's event loop.
    """

    def __init__(self, capacity: int = 100):
        """Initialize history store.

        Args:
            capacity: Maximum number of samples kept (default 100)
        """
        if capacity < 1:
            raise ValueError(f"Capacity must be >= 1, got {capacity}")

        self.capacity = capacity
        self._entries: dict[int, int] = {}
        self._order: deque[int] = deque()

        logger.debug(f"LatencyHistory initialized with capacity={capacity}")

    def record(self, timestamp: int, latency: int) -> None:
        """Insert or overwrite the entry at timestamp, then trim.

        Args:
            timestamp: Epoch milliseconds key
            latency: Latency in milliseconds or FAILURE (-1)
        """
        if timestamp in self._entries:
            logger.debug(
                f"Overwriting history entry {timestamp}: "
                f"{self._entries[timestamp]} -> {latency}"
            )
        else:
            self._order.append(timestamp)
        self._entries[timestamp] = latency
        self.trim()

    def trim(self) -> None:
        """Evict oldest-inserted entries until size <= capacity."""
        while len(self._order) > self.capacity:
            oldest = self._order.popleft()
            evicted = self._entries.pop(oldest)
            logger.debug(f"Evicted history entry {oldest} (latency={evicted})")

    def snapshot(self) -> Mapping[int, int]:
        """Return a read-only ordered copy of the history.

        Returns:
            Mapping of timestamp -> latency, oldest-inserted first
        """
        return MappingProxyType({key: self._entries[key] for key in self._order})

    def latest(self) -> Optional[Sample]:
        """Return the most recently inserted sample, or None if empty."""
        if not self._order:
            return None
        key = self._order[-1]
        return Sample(timestamp=key, latency=self._entries[key])

    def values_newest_first(self) -> Iterator[int]:
        """Iterate latencies from newest to oldest insertion."""
        for key in reversed(self._order):
            yield self._entries[key]

    def failure_count(self) -> int:
        """Count FAILURE samples currently held."""
        return sum(1 for latency in self._entries.values() if latency == FAILURE)

    def __len__(self) -> int:
        return len(self._order)

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"LatencyHistory(capacity={self.capacity}, size={len(self)})"
