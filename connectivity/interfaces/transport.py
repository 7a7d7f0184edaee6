"""Transport interface used by the sampler to probe the endpoint."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from connectivity.transport import TransportResponse


class ITransport(ABC):
    """Issues a GET request and reports its status code."""

    @abstractmethod
    async def get(self, url: str) -> "TransportResponse":
        """Send a GET request to url.

        Args:
            url: Absolute http(s) URL

        Returns:
            Response status code

        Raises:
            Exception: Any network or protocol error
        """
        pass

    @abstractmethod
    async def aclose(self) -> None:
        """Release network resources held by the transport."""
        pass
