"""Probe metrics collection and history statistics.

Counts monitor cycles and outcomes, and summarizes the latency history
for status reporting.
"""

import logging
import time
from collections.abc import Mapping
from datetime import datetime
from typing import Any, Optional

import numpy as np

from connectivity.status import FAILURE, ConnectivityStatus

logger = logging.getLogger(__name__)


def summarize_history(history: Mapping[int, int]) -> dict[str, float | int]:
    """Get latency statistics for a history snapshot.

    Args:
        history: Mapping of timestamp -> latency (FAILURE = -1)

    Returns:
        Dictionary with samples, failures, failure_ratio and, over the
        successful samples, avg, min, max, p50, p95, p99 (milliseconds)
    """
    latencies = list(history.values())
    successes = np.array([v for v in latencies if v != FAILURE], dtype=float)
    failures = len(latencies) - len(successes)

    stats: dict[str, float | int] = {
        "samples": len(latencies),
        "failures": failures,
        "failure_ratio": failures / len(latencies) if latencies else 0.0,
    }

    if successes.size == 0:
        stats.update({"avg": 0.0, "min": 0.0, "max": 0.0, "p50": 0.0, "p95": 0.0, "p99": 0.0})
        return stats

    stats.update(
        {
            "avg": float(np.mean(successes)),
            "min": float(np.min(successes)),
            "max": float(np.max(successes)),
            "p50": float(np.percentile(successes, 50)),
            "p95": float(np.percentile(successes, 95)),
            "p99": float(np.percentile(successes, 99)),
        }
    )
    return stats


class MonitorMetrics:
    """Counts probe outcomes and tier transitions."""

    def __init__(self) -> None:
        """Initialize metrics collector."""
        self.cycles = 0
        self.successes = 0
        self.failures = 0
        self.tier_changes = 0
        self.subscriber_errors = 0
        self.last_tier: Optional[ConnectivityStatus] = None
        self.start_time = time.time()

    def record_sample(self, latency: int) -> None:
        """Count one recorded probe.

        Args:
            latency: Recorded latency in milliseconds, or FAILURE
        """
        self.cycles += 1
        if latency == FAILURE:
            self.failures += 1
        else:
            self.successes += 1

    def record_tier(self, tier: ConnectivityStatus) -> None:
        """Track a classification, counting transitions between tiers."""
        if self.last_tier is not None and tier != self.last_tier:
            self.tier_changes += 1
            logger.info(
                f"Connectivity changed: {self.last_tier.name} -> {tier.name}",
                extra={"tier": tier.name},
            )
        self.last_tier = tier

    def increment_subscriber_error(self) -> None:
        """Increment subscriber callback error counter."""
        self.subscriber_errors += 1

    def get_snapshot(self, history: Optional[Mapping[int, int]] = None) -> dict[str, Any]:
        """Get current metrics snapshot.

        Args:
            history: Optional history snapshot to summarize

        Returns:
            Dictionary with all metrics data
        """
        snapshot: dict[str, Any] = {
            "cycles": self.cycles,
            "successes": self.successes,
            "failures": self.failures,
            "tier_changes": self.tier_changes,
            "subscriber_errors": self.subscriber_errors,
            "last_tier": self.last_tier.name if self.last_tier is not None else None,
            "uptime_sec": time.time() - self.start_time,
            "timestamp": datetime.now().isoformat(),
        }
        if history is not None:
            snapshot["latency_ms"] = summarize_history(history)
        return snapshot
