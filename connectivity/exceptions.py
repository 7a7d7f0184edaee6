"""Custom exceptions for the connectivity monitor."""


class ConnectivityError(Exception):
    """Base exception for all connectivity monitor errors."""

    pass


class InvalidEndpointError(ConnectivityError):
    """Endpoint is not an absolute http(s) URL (raised at construction)."""

    pass


class RequestFailure(ConnectivityError):
    """Latency probe failed: non-200 response or transport error.

    Always recovered inside the sampler and recorded as a FAILURE sample.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ThresholdOrderError(ConnectivityError):
    """Latency thresholds are not strictly increasing from fast to disconnected."""

    pass


class MonitorDisposedError(ConnectivityError):
    """Operation requires a monitor that has not been disposed."""

    pass


class ConfigurationError(ConnectivityError):
    """Error in monitor configuration."""

    pass
