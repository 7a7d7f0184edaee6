"""Structured logging configuration for the connectivity monitor.

Provides key=value formatted logs carrying probe context (endpoint,
latency, status code, quality tier).
"""

import logging
import sys
from typing import Any

from connectivity.config import LogLevelName, get_config

# Root of every logger in the package
LOGGER_NAMESPACE = "connectivity"

LOG_LEVELS: dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


class StructuredFormatter(logging.Formatter):
    """Key=value log formatter with probe context."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as key=value pairs.

        Args:
            record: Log record to format

        Returns:
            Structured log string
        """
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        # Add custom fields from extra parameter
        if hasattr(record, "endpoint"):
            log_data["endpoint"] = record.endpoint
        if hasattr(record, "latency_ms"):
            log_data["latency_ms"] = record.latency_ms
        if hasattr(record, "status_code"):
            log_data["status_code"] = record.status_code
        if hasattr(record, "tier"):
            log_data["tier"] = record.tier

        pairs = [f"{k}={v}" for k, v in log_data.items()]
        line = " ".join(pairs)

        # Tracebacks are multi-line, keep them after the pairs
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def set_log_level(level: LogLevelName) -> None:
    """Set the verbosity of all connectivity loggers.

    Args:
        level: One of "debug", "info", "warning", "error"

    Raises:
        KeyError: If level is not a known level name
    """
    logging.getLogger(LOGGER_NAMESPACE).setLevel(LOG_LEVELS[level.lower()])


def setup_logging() -> None:
    """Configure structured console logging for the application.

    Sets up the handler, formatter and package log level from configuration.
    """
    config = get_config()

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.DEBUG)
    console_handler.setFormatter(StructuredFormatter(datefmt="%Y-%m-%dT%H:%M:%S"))
    root_logger.addHandler(console_handler)

    # Library log levels
    logging.getLogger("uvicorn").setLevel(logging.INFO)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)

    set_log_level(config.log_level)

