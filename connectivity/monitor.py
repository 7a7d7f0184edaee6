"""Connectivity monitor: periodic latency probing and quality classification.

Coordinates the cycle Scheduler -> Sampler -> LatencyHistory -> estimator ->
classifier -> subscriber for a single endpoint.
"""

import logging
from collections.abc import Callable, Mapping
from dataclasses import replace
from datetime import timedelta
from typing import Optional

from connectivity.classifier import LatencyThresholds, classify_latency
from connectivity.config import ConnectivityConfig, LogLevelName, get_config
from connectivity.estimator import estimate_current_latency
from connectivity.exceptions import MonitorDisposedError
from connectivity.history import LatencyHistory
from connectivity.interfaces.transport import ITransport
from connectivity.logging_config import set_log_level
from connectivity.metrics import MonitorMetrics
from connectivity.sampler import Sampler, validate_endpoint
from connectivity.scheduler import PeriodicScheduler
from connectivity.status import FAILURE, ConnectivityStatus, MonitorState
from connectivity.transport import HttpxTransport, epoch_ms

logger = logging.getLogger(__name__)

LatencyCallback = Callable[[ConnectivityStatus, int], None]


def _interval_seconds(interval: timedelta | float) -> float:
    if isinstance(interval, timedelta):
        return interval.total_seconds()
    return float(interval)


class ConnectivityMonitor:
    """Measures latency to one endpoint and classifies connection quality.

    Sampling starts as soon as the monitor is constructed, so it must be
    created from a running asyncio event loop. Not thread-safe: configure it
    from the loop that owns it.
    """

    def __init__(
        self,
        endpoint: Optional[str] = None,
        *,
        transport: Optional[ITransport] = None,
        config: Optional[ConnectivityConfig] = None,
        clock: Callable[[], int] = epoch_ms,
    ):
        """Initialize the monitor and start sampling.

        Args:
            endpoint: Absolute http(s) URL to probe (default from config)
            transport: GET transport (default: HttpxTransport, owned and
                closed by the monitor)
            config: Configuration (default: global config)
            clock: Epoch milliseconds source

        Raises:
            InvalidEndpointError: If endpoint is not an absolute http(s) URL
            ThresholdOrderError: If config asks for threshold validation and
                the configured thresholds are out of order
            RuntimeError: If no event loop is running
        """
        config = config or get_config()
        endpoint = validate_endpoint(endpoint or config.endpoint)

        self._check_interval = config.check_interval
        self._allowed_failed_requests = config.allowed_failed_requests
        self._log_level: LogLevelName = config.log_level
        self._validate_thresholds = config.validate_thresholds
        self._thresholds = LatencyThresholds(
            disconnected=config.threshold_disconnected_ms,
            slow=config.threshold_slow_ms,
            moderate=config.threshold_moderate_ms,
            fast=config.threshold_fast_ms,
        )
        if self._validate_thresholds:
            self._thresholds.validate_order()

        set_log_level(self._log_level)

        self._owns_transport = transport is None
        self.transport = transport or HttpxTransport(timeout=config.request_timeout)
        self.history = LatencyHistory(capacity=config.history_limit)
        self.sampler = Sampler(
            endpoint,
            self.transport,
            self.history,
            failure_keys=config.failure_keys,
            clock=clock,
        )
        self.metrics = MonitorMetrics()

        self._subscriber: Optional[LatencyCallback] = None
        self._current_status = ConnectivityStatus.FAST
        self._current_latency = FAILURE
        self._state = MonitorState.PAUSED

        self._scheduler = PeriodicScheduler(
            self._scheduled_cycle, _interval_seconds(self._check_interval)
        )

        logger.info(
            f"Connectivity monitor created for {endpoint}",
            extra={"endpoint": endpoint},
        )
        self._start()

    # Lifecycle

    def _start(self) -> None:
        self._scheduler.start()
        self._state = MonitorState.RUNNING

    def pause(self) -> None:
        """Stop future probes. A probe already in flight still completes."""
        if self._state is MonitorState.DISPOSED:
            logger.warning("pause() ignored: monitor disposed")
            return
        self._scheduler.pause()
        self._state = MonitorState.PAUSED

    def resume(self) -> None:
        """Restart probing with an immediate probe, even if already running."""
        if self._state is MonitorState.DISPOSED:
            logger.warning("resume() ignored: monitor disposed")
            return
        self._scheduler.resume()
        self._state = MonitorState.RUNNING

    def dispose(self) -> None:
        """Stop probing for good.

        In-flight probes are neither cancelled nor awaited, but their results
        are discarded. History stays readable.
        """
        if self._state is MonitorState.DISPOSED:
            return
        self._scheduler.pause()
        self.sampler.close()
        self._state = MonitorState.DISPOSED
        logger.info(
            f"Connectivity monitor disposed "
            f"({self._scheduler.in_flight()} probes still in flight)"
        )

    async def drain(self) -> None:
        """Wait for the scheduled probes in flight at call time."""
        await self._scheduler.drain()

    async def aclose(self) -> None:
        """Dispose, wait for in-flight probes and close an owned transport."""
        self.dispose()
        await self.drain()
        if self._owns_transport:
            await self.transport.aclose()

    # Configuration

    def configure(
        self,
        check_interval: Optional[timedelta | float] = None,
        allowed_failed_requests: Optional[int] = None,
        log_level: Optional[LogLevelName] = None,
    ) -> None:
        """Apply new settings and restart the scheduler.

        Omitted arguments keep their current value. Values are not validated.
        Restarting runs an immediate probe, even if the monitor was paused; a
        disposed monitor takes the values but does not restart.

        Args:
            check_interval: Probe period (timedelta, or seconds)
            allowed_failed_requests: Size of the recent failure window
            log_level: One of "debug", "info", "warning", "error"
        """
        if check_interval is not None:
            self._check_interval = (
                check_interval
                if isinstance(check_interval, timedelta)
                else timedelta(seconds=check_interval)
            )
        if allowed_failed_requests is not None:
            self._allowed_failed_requests = allowed_failed_requests
        if log_level is not None:
            self._log_level = log_level
            set_log_level(log_level)

        logger.info(
            f"Monitor configured: interval={self._check_interval}, "
            f"allowed_failed_requests={self._allowed_failed_requests}, "
            f"log_level={self._log_level}"
        )

        if self._state is MonitorState.DISPOSED:
            logger.warning("Monitor disposed, configuration stored without restart")
            return

        # Synchronous pause + resume: no probe runs in between
        self._scheduler.reconfigure(_interval_seconds(self._check_interval))
        self._state = MonitorState.RUNNING

    def set_latency_thresholds(
        self,
        disconnected: int = 3000,
        slow: int = 1000,
        moderate: int = 500,
        fast: int = 200,
        *,
        strict: bool = False,
    ) -> None:
        """Replace all four tier boundaries (milliseconds).

        Args:
            disconnected: Ceiling for DISCONNECTED (default 3000)
            slow: Ceiling for SLOW (default 1000)
            moderate: Ceiling for MODERATE (default 500)
            fast: Ceiling for FAST (default 200)
            strict: Reject boundaries that are not strictly increasing from
                fast to disconnected (also enabled by config)

        Raises:
            ThresholdOrderError: In strict mode, if the boundaries are out of order
        """
        thresholds = LatencyThresholds(
            disconnected=disconnected, slow=slow, moderate=moderate, fast=fast
        )
        if strict or self._validate_thresholds:
            thresholds.validate_order()
        self._thresholds = thresholds
        logger.debug(f"Latency thresholds set: {thresholds}")

    def listen_to_latency_changes(self, callback: Optional[LatencyCallback]) -> None:
        """Register the single subscriber, replacing any previous one.

        Args:
            callback: Called with (tier, latency_ms) after every probe;
                None removes the subscriber
        """
        self._subscriber = callback

    # Probe cycle

    async def check_connectivity(self) -> None:
        """Run one probe cycle: sample, smooth, classify, notify.

        Raises:
            MonitorDisposedError: If the monitor was disposed
        """
        if self._state is MonitorState.DISPOSED:
            raise MonitorDisposedError("Cannot probe with a disposed monitor")
        await self._run_cycle()

    async def _scheduled_cycle(self) -> None:
        # Firings queued just before dispose() end quietly
        if self._state is MonitorState.DISPOSED:
            return
        await self._run_cycle()

    async def _run_cycle(self) -> None:
        sample = await self.sampler.sample()
        if sample is None:
            return

        self.metrics.record_sample(sample.latency)
        self._set_status()

    def get_current_latency(self) -> int:
        """Smooth the history into the current latency.

        Returns:
            Latency in milliseconds, or FAILURE (-1)
        """
        return estimate_current_latency(self.history, self._allowed_failed_requests)

    def _set_status(self) -> None:
        latency = self.get_current_latency()
        tier = classify_latency(latency, self._thresholds)

        self._current_latency = latency
        self._current_status = tier
        self.metrics.record_tier(tier)

        logger.debug(
            f"Current latency {latency}ms -> {tier.name}",
            extra={"latency_ms": latency, "tier": tier.name},
        )

        if self._subscriber is None:
            return
        try:
            self._subscriber(tier, latency)
        except Exception as e:
            self.metrics.increment_subscriber_error()
            logger.error(f"Latency subscriber raised: {e}", exc_info=True)

    # Read-only state

    @property
    def endpoint(self) -> str:
        return self.sampler.endpoint

    @property
    def latency_history(self) -> Mapping[int, int]:
        """Read-only snapshot of timestamp (epoch ms) -> latency ms or -1."""
        return self.history.snapshot()

    @property
    def current_status(self) -> ConnectivityStatus:
        """Tier computed by the most recent cycle (FAST before the first)."""
        return self._current_status

    @property
    def current_latency(self) -> int:
        """Latency computed by the most recent cycle (-1 before the first)."""
        return self._current_latency

    @property
    def state(self) -> MonitorState:
        return self._state

    @property
    def thresholds(self) -> LatencyThresholds:
        """Copy of the active thresholds."""
        return replace(self._thresholds)

    @property
    def check_interval(self) -> timedelta:
        return self._check_interval

    @property
    def allowed_failed_requests(self) -> int:
        return self._allowed_failed_requests

    @property
    def log_level(self) -> LogLevelName:
        return self._log_level

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"ConnectivityMonitor(endpoint={self.endpoint!r}, state={self._state.value}, "
            f"status={self._current_status.name}, samples={len(self.history)})"
        )
