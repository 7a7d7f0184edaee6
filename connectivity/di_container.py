"""Dependency injection container for connectivity monitor components.

Provides centralized management of service instances with proper lifecycle
and dependency resolution.
"""

import logging
from collections.abc import Callable
from typing import Any, Optional

from connectivity.config import ConnectivityConfig, get_config
from connectivity.interfaces.transport import ITransport
from connectivity.monitor import ConnectivityMonitor
from connectivity.transport import HttpxTransport, epoch_ms

logger = logging.getLogger(__name__)


class DIContainer:
    """Dependency injection container for monitor components."""

    def __init__(
        self,
        config: Optional[ConnectivityConfig] = None,
        clock: Callable[[], int] = epoch_ms,
    ) -> None:
        """Initialize DI container.

        Args:
            config: Configuration override (default: global config)
            clock: Epoch milliseconds source for the monitor
        """
        self._config = config or get_config()
        self._clock = clock
        self._instances: dict[str, Any] = {}

        logger.info("DI container initialized")

    def get_config(self) -> ConnectivityConfig:
        """Get configuration instance."""
        return self._config

    def set_transport(self, transport: ITransport) -> None:
        """Use a specific transport (e.g. a fake in tests).

        Must be called before the monitor is created.
        """
        self._instances["transport"] = transport

    def get_transport(self) -> ITransport:
        """Get or create transport instance."""
        if "transport" not in self._instances:
            self._instances["transport"] = HttpxTransport(
                timeout=self._config.request_timeout
            )
        return self._instances["transport"]

    def get_monitor(self) -> ConnectivityMonitor:
        """Get or create connectivity monitor (starts sampling on creation).

        Must be called from a running event loop.
        """
        if "monitor" not in self._instances:
            self._instances["monitor"] = ConnectivityMonitor(
                self._config.endpoint,
                transport=self.get_transport(),
                config=self._config,
                clock=self._clock,
            )
        return self._instances["monitor"]

    def has_monitor(self) -> bool:
        """Check whether the monitor has been created."""
        return "monitor" in self._instances

    async def cleanup(self) -> None:
        """Clean up all managed instances."""
        logger.info("Cleaning up DI container")

        if "monitor" in self._instances:
            try:
                await self._instances["monitor"].aclose()
            except Exception as e:
                logger.error(f"Error closing connectivity monitor: {e}")

        if "transport" in self._instances:
            try:
                await self._instances["transport"].aclose()
            except Exception as e:
                logger.error(f"Error closing transport: {e}")

        self._instances.clear()
        logger.info("DI container cleaned up")


# Global container instance
_container: Optional[DIContainer] = None


def get_container() -> DIContainer:
    """Get the global DI container instance.

    Returns:
        DIContainer singleton
    """
    global _container
    if _container is None:
        _container = DIContainer()
    return _container


def set_container(container: Optional[DIContainer]) -> None:
    """Replace the global DI container (None resets it)."""
    global _container
    _container = container


async def cleanup_container() -> None:
    """Clean up the global DI container."""
    global _container
    if _container is not None:
        await _container.cleanup()
        _container = None
