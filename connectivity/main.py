"""FastAPI status server for the connectivity monitor.

Runs one monitor for the configured endpoint and exposes its current
status, latency history and metrics over a small REST API.
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Any

import uvicorn
from fastapi import FastAPI

from connectivity.di_container import cleanup_container, get_container
from connectivity.logging_config import setup_logging

logger = logging.getLogger(__name__)

# Global startup timestamp
_startup_time = 0.0


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager (startup/shutdown).

    Args:
        app: FastAPI application instance

    Yields:
        Control during application lifetime
    """
    global _startup_time

    logger.info("Starting connectivity monitor server...")
    _startup_time = time.time()

    container = get_container()
    config = container.get_config()
    logger.info(f"Environment: {config.env}")

    monitor = container.get_monitor()
    logger.info(
        f"Monitoring {monitor.endpoint} every {config.check_interval.total_seconds():.1f}s"
    )

    yield

    logger.info("Shutting down connectivity monitor server...")
    await cleanup_container()
    logger.info("Connectivity monitor server stopped")


app = FastAPI(
    title="Connectivity Monitor API",
    version="1.0.0",
    description="Latency-based connection quality monitoring",
    lifespan=lifespan,
)


def _status_payload() -> dict[str, Any]:
    monitor = get_container().get_monitor()
    return {
        "endpoint": monitor.endpoint,
        "state": monitor.state.value,
        "status": monitor.current_status.name.lower(),
        "latency_ms": monitor.current_latency,
        "samples": len(monitor.history),
        "failed_samples": monitor.history.failure_count(),
        "thresholds_ms": {
            tier.name.lower(): boundary
            for tier, boundary in monitor.thresholds.as_table().items()
        },
        "uptime_sec": time.time() - _startup_time,
        "timestamp": time.time(),
    }


@app.get("/api/status")
async def get_status() -> dict[str, Any]:
    """Get current connection quality.

    Returns:
        Dictionary with tier, smoothed latency and monitor state
    """
    return _status_payload()


@app.get("/api/history")
async def get_history() -> dict[str, Any]:
    """Get the latency history.

    Returns:
        Samples oldest-inserted first; latency -1 marks a failed probe
    """
    monitor = get_container().get_monitor()
    return {
        "capacity": monitor.history.capacity,
        "samples": [
            {"timestamp": timestamp, "latency_ms": latency}
            for timestamp, latency in monitor.latency_history.items()
        ],
    }


@app.get("/api/metrics")
async def get_metrics() -> dict[str, Any]:
    """Get probe metrics.

    Returns:
        Counters and latency statistics over the history
    """
    monitor = get_container().get_monitor()
    return monitor.metrics.get_snapshot(monitor.latency_history)


@app.post("/api/pause")
async def pause_monitor() -> dict[str, Any]:
    """Pause probing."""
    get_container().get_monitor().pause()
    return _status_payload()


@app.post("/api/resume")
async def resume_monitor() -> dict[str, Any]:
    """Resume probing (probes immediately)."""
    get_container().get_monitor().resume()
    return _status_payload()


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint.

    Returns:
        Health status
    """
    return {"status": "healthy", "service": "connectivity-monitor"}


def run() -> None:
    """Run the status server with uvicorn using configured host and port."""
    setup_logging()
    config = get_container().get_config()
    uvicorn.run(app, host=config.host, port=config.port, log_config=None)


if __name__ == "__main__":
    run()
