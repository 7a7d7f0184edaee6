"""Single latency probe against the monitored endpoint."""

import logging
from collections.abc import Callable
from typing import Optional

from pydantic import HttpUrl, TypeAdapter, ValidationError

from connectivity.config import FailureKeyPolicy
from connectivity.exceptions import InvalidEndpointError, RequestFailure
from connectivity.interfaces.history import ILatencyHistory
from connectivity.interfaces.transport import ITransport
from connectivity.status import FAILURE, Sample
from connectivity.transport import epoch_ms

logger = logging.getLogger(__name__)

_http_url = TypeAdapter(HttpUrl)


def validate_endpoint(endpoint: str) -> str:
    """Check that endpoint is an absolute http(s) URL.

    Args:
        endpoint: URL to probe

    Returns:
        The endpoint, unchanged

    Raises:
        InvalidEndpointError: If endpoint is not an absolute http(s) URL
    """
    try:
        _http_url.validate_python(endpoint)
    except ValidationError as e:
        raise InvalidEndpointError(f"Invalid endpoint {endpoint!r}: {e}") from e
    return endpoint


class Sampler:
    """Performs one GET probe per call and records the result in history.

    Every call writes exactly one history entry: the round-trip time on a
    200 response, FAILURE otherwise.
    """

    def __init__(
        self,
        endpoint: str,
        transport: ITransport,
        history: ILatencyHistory,
        failure_keys: FailureKeyPolicy = "attempt",
        clock: Callable[[], int] = epoch_ms,
    ):
        """Initialize sampler.

        Args:
            endpoint: Absolute http(s) URL to probe
            transport: Transport performing the GET request
            history: History receiving the samples
            failure_keys: "attempt" gives every probe its own increasing key;
                "last_success" keys failures by the last successful timestamp
            clock: Epoch milliseconds source

        Raises:
            InvalidEndpointError: If endpoint is malformed
        """
        self.endpoint = validate_endpoint(endpoint)
        self.transport = transport
        self.history = history
        self.failure_keys = failure_keys
        self._clock = clock

        self._last_success_ms = 0
        self._last_key: Optional[int] = None
        self._closed = False

    async def _probe(self) -> tuple[int, int]:
        """Send the GET request, timing it with the sampler clock.

        Returns:
            (completion timestamp, round-trip milliseconds)

        Raises:
            RequestFailure: On a non-200 status or any transport error
        """
        started_ms = self._clock()
        try:
            response = await self.transport.get(self.endpoint)
        except Exception as e:
            raise RequestFailure(f"{type(e).__name__}: {e}") from e

        if response.status_code != 200:
            raise RequestFailure(
                f"Status code: {response.status_code}",
                status_code=response.status_code,
            )

        completed_ms = self._clock()
        duration_ms = completed_ms - started_ms
        if duration_ms < 0:
            logger.warning(
                f"Clock stepped back {-duration_ms}ms during probe, recording 0ms",
                extra={"endpoint": self.endpoint, "latency_ms": duration_ms},
            )
            duration_ms = 0
        return completed_ms, duration_ms

    async def sample(self) -> Optional[Sample]:
        """Probe the endpoint once and record the outcome.

        Returns:
            The recorded sample, or None if the sampler was closed while the
            request was in flight
        """
        try:
            completed_ms, duration_ms = await self._probe()
        except RequestFailure as e:
            logger.error(
                f"Failed request. {e}",
                exc_info=e if e.__cause__ is not None else None,
                extra={"endpoint": self.endpoint, "status_code": e.status_code},
            )
            return self._write(self._failure_key(), FAILURE)

        self._last_success_ms = completed_ms
        logger.debug(
            f"Probe completed in {duration_ms}ms",
            extra={"endpoint": self.endpoint, "latency_ms": duration_ms},
        )
        return self._write(self._success_key(completed_ms), duration_ms)

    def _success_key(self, completed_ms: int) -> int:
        if self.failure_keys == "last_success":
            return completed_ms
        return self._next_attempt_key(completed_ms)

    def _failure_key(self) -> int:
        if self.failure_keys == "last_success":
            return self._last_success_ms
        return self._next_attempt_key(self._clock())

    def _next_attempt_key(self, now_ms: int) -> int:
        if self._last_key is not None and now_ms <= self._last_key:
            return self._last_key + 1
        return now_ms

    def _write(self, key: int, latency: int) -> Optional[Sample]:
        if self._closed:
            logger.debug(f"Sampler closed, dropping late sample {key}={latency}")
            return None
        self._last_key = key if self._last_key is None else max(self._last_key, key)
        self.history.record(key, latency)
        return Sample(timestamp=key, latency=latency)

    def close(self) -> None:
        """Stop recording; results of in-flight probes are dropped."""
        self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed
