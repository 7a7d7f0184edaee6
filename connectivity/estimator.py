"""Latency smoothing over the recent probe history.

Turns raw samples into one representative "current latency" that tolerates
a bounded number of recent failures.
"""

import logging

from connectivity.interfaces.history import ILatencyHistory
from connectivity.status import FAILURE

logger = logging.getLogger(__name__)

# Number of most recent samples averaged when none of them failed
AVERAGE_WINDOW = 3


def estimate_current_latency(
    history: ILatencyHistory, allowed_failed_requests: int
) -> int:
    """Compute the current latency from history.

    Args:
        history: Latency history, oldest-inserted first
        allowed_failed_requests: Size of the recent window inspected for failures

    Returns:
        Latency in milliseconds, or FAILURE (-1)

    Rules, applied in order:
        1. Empty history -> FAILURE
        2. Fewer than 3 samples -> the most recent sample
        3. At least ``allowed_failed_requests`` samples: if every one of the
           most recent ``allowed_failed_requests`` failed -> FAILURE; if only
           some failed -> the newest successful value in that window
        4. If any of the 3 most recent failed -> the newest successful value
           in the whole history (FAILURE if there is none); otherwise the
           floor average of the 3 most recent
    """
    if len(history) == 0:
        return FAILURE

    if len(history) < AVERAGE_WINDOW:
        logger.debug(f"History has {len(history)} samples (< {AVERAGE_WINDOW})")
        latest = history.latest()
        return latest.latency if latest is not None else FAILURE

    newest_first = list(history.values_newest_first())

    if len(newest_first) >= allowed_failed_requests:
        window = newest_first[:allowed_failed_requests]
        # all() of an empty window is True: zero allowed failures reads as down
        if all(latency == FAILURE for latency in window):
            return FAILURE
        if FAILURE in window:
            return next(latency for latency in window if latency != FAILURE)

    recent = newest_first[:AVERAGE_WINDOW]
    if FAILURE in recent:
        return next(
            (latency for latency in newest_first if latency != FAILURE), FAILURE
        )
    return sum(recent) // len(recent)
