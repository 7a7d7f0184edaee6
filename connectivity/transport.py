"""HTTP transport used to probe the monitored endpoint."""

import logging
import time
from dataclasses import dataclass
from typing import Optional

import httpx

from connectivity.interfaces.transport import ITransport

logger = logging.getLogger(__name__)


def epoch_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return time.time_ns() // 1_000_000


@dataclass(frozen=True)
class TransportResponse:
    """Outcome of one GET request.

    Attributes:
        status_code: HTTP status code
    """

    status_code: int


class HttpxTransport(ITransport):
    """Async GET transport backed by httpx.

    Only the response headers are awaited; the body is never downloaded.
    """

    def __init__(
        self,
        timeout: float = 5.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize transport.

        Args:
            timeout: Per-request timeout in seconds
            client: Optional preconfigured client (not closed by aclose())
        """
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=timeout, follow_redirects=False
        )

    async def get(self, url: str) -> TransportResponse:
        """Send a GET request, returning once its headers arrive.

        Args:
            url: Absolute http(s) URL

        Returns:
            Response status code

        Raises:
            httpx.HTTPError: On network, timeout or protocol errors
        """
        request = self._client.build_request("GET", url)
        response = await self._client.send(request, stream=True)
        await response.aclose()
        return TransportResponse(status_code=response.status_code)

    async def aclose(self) -> None:
        """Close the underlying client if this transport created it."""
        if self._owns_client:
            await self._client.aclose()
            logger.debug("HTTP client closed")
