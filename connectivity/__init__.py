"""Connectivity Monitor - latency-based connection quality classification.

Probes one HTTP endpoint on a schedule, smooths the latency history into a
current latency, classifies it into a quality tier and notifies a subscriber.
"""

from connectivity.classifier import LatencyThresholds, classify_latency
from connectivity.config import ConnectivityConfig, get_config
from connectivity.estimator import estimate_current_latency
from connectivity.exceptions import (
    ConfigurationError,
    ConnectivityError,
    InvalidEndpointError,
    MonitorDisposedError,
    RequestFailure,
    ThresholdOrderError,
)
from connectivity.history import LatencyHistory
from connectivity.metrics import MonitorMetrics
from connectivity.monitor import ConnectivityMonitor, LatencyCallback
from connectivity.sampler import Sampler
from connectivity.scheduler import PeriodicScheduler
from connectivity.status import FAILURE, ConnectivityStatus, MonitorState, Sample
from connectivity.transport import HttpxTransport, TransportResponse

__version__ = "1.0.0"

__all__ = [
    # Core components
    "ConnectivityMonitor",
    "LatencyHistory",
    "PeriodicScheduler",
    "Sampler",
    "HttpxTransport",
    # Algorithms
    "estimate_current_latency",
    "classify_latency",
    "LatencyThresholds",
    # Data structures
    "ConnectivityStatus",
    "MonitorState",
    "Sample",
    "TransportResponse",
    "FAILURE",
    "LatencyCallback",
    # Configuration
    "ConnectivityConfig",
    "get_config",
    # Metrics
    "MonitorMetrics",
    # Errors
    "ConfigurationError",
    "ConnectivityError",
    "InvalidEndpointError",
    "MonitorDisposedError",
    "RequestFailure",
    "ThresholdOrderError",
]
