"""Connection quality tiers and latency sample definitions."""

from dataclasses import dataclass
from enum import Enum
from functools import total_ordering

# Latency value recorded for a failed or unmeasurable request
FAILURE = -1


@total_ordering
class ConnectivityStatus(Enum):
    """Connection quality tier, ordered worst to best.

    - DISCONNECTED: latency too high, or no connection at all
    - SLOW: connected, but latency is high
    - MODERATE: latency is moderate
    - FAST: latency is low
    """

    DISCONNECTED = 0
    SLOW = 1
    MODERATE = 2
    FAST = 3

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, ConnectivityStatus):
            return NotImplemented
        return self.value < other.value


class MonitorState(Enum):
    """Lifecycle state of a connectivity monitor."""

    RUNNING = "running"
    PAUSED = "paused"
    DISPOSED = "disposed"


@dataclass(frozen=True)
class Sample:
    """One latency measurement or failure marker.

    Attributes:
        timestamp: History key (epoch milliseconds)
        latency: Round-trip time in milliseconds, or FAILURE (-1)
    """

    timestamp: int
    latency: int

    @property
    def failed(self) -> bool:
        return self.latency == FAILURE
