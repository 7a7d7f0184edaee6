"""Internal interfaces for connectivity monitor components.

Abstract Base Classes (ABCs) defining contracts for the transport,
history store and scheduler.
"""

from connectivity.interfaces.history import ILatencyHistory
from connectivity.interfaces.scheduler import IScheduler
from connectivity.interfaces.transport import ITransport

__all__ = [
    "ILatencyHistory",
    "IScheduler",
    "ITransport",
]
