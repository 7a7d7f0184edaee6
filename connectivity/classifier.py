"""Latency threshold table and quality tier classification."""

import logging
from dataclasses import dataclass

from connectivity.exceptions import ThresholdOrderError
from connectivity.status import FAILURE, ConnectivityStatus

logger = logging.getLogger(__name__)

# Tie-break order when two tiers share a boundary: better tier wins
_SCAN_ORDER = (
    ConnectivityStatus.FAST,
    ConnectivityStatus.MODERATE,
    ConnectivityStatus.SLOW,
    ConnectivityStatus.DISCONNECTED,
)


@dataclass
class LatencyThresholds:
    """Upper latency bound (milliseconds, inclusive) for each tier.

    Attributes:
        disconnected: Ceiling for DISCONNECTED; anything above is also DISCONNECTED
        slow: Ceiling for SLOW
        moderate: Ceiling for MODERATE
        fast: Ceiling for FAST

    Ordering is not enforced here; call validate_order() to check it.
    """

    disconnected: int = 3000
    slow: int = 1000
    moderate: int = 500
    fast: int = 200

    def boundary(self, status: ConnectivityStatus) -> int:
        """Get the boundary configured for a tier."""
        return getattr(self, status.name.lower())

    def as_table(self) -> dict[ConnectivityStatus, int]:
        """Get the thresholds as a tier -> boundary mapping."""
        return {status: self.boundary(status) for status in _SCAN_ORDER}

    def validate_order(self) -> None:
        """Check that boundaries grow strictly from fast to disconnected.

        Raises:
            ThresholdOrderError: If the boundaries are not strictly increasing
        """
        if not (self.fast < self.moderate < self.slow < self.disconnected):
            raise ThresholdOrderError(
                f"Thresholds must satisfy fast < moderate < slow < disconnected, "
                f"got fast={self.fast}, moderate={self.moderate}, "
                f"slow={self.slow}, disconnected={self.disconnected}"
            )


def classify_latency(latency: int, thresholds: LatencyThresholds) -> ConnectivityStatus:
    """Map a latency to a quality tier.

    Args:
        latency: Current latency in milliseconds, or FAILURE (-1)
        thresholds: Tier boundaries

    Returns:
        The tier with the smallest boundary >= latency, DISCONNECTED when the
        latency exceeds every boundary or is FAILURE
    """
    if latency == FAILURE:
        return ConnectivityStatus.DISCONNECTED

    ranked = sorted(_SCAN_ORDER, key=thresholds.boundary)
    for status in ranked:
        if latency <= thresholds.boundary(status):
            return status

    logger.debug(f"Latency {latency}ms exceeds every threshold")
    return ConnectivityStatus.DISCONNECTED
