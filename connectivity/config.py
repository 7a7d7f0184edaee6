"""Configuration management for the connectivity monitor.

Loads and validates environment variables using Pydantic settings.
"""

from datetime import timedelta
from typing import Literal

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings

from connectivity.exceptions import ConfigurationError

LogLevelName = Literal["debug", "info", "warning", "error"]
FailureKeyPolicy = Literal["attempt", "last_success"]


class ConnectivityConfig(BaseSettings):
    """Connectivity monitor configuration loaded from environment variables.

    Every field can be set with a ``CONNECTIVITY_`` prefixed variable, e.g.
    ``CONNECTIVITY_ENDPOINT=https://example.org/ping``.
    """

    # Status API settings
    env: Literal["development", "production", "test"] = Field(default="development")
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8000, ge=1024, le=65535)

    # Probe settings
    endpoint: str = Field(default="https://example.com")
    check_interval: timedelta = Field(default=timedelta(seconds=3))
    allowed_failed_requests: int = Field(default=2, ge=1)
    request_timeout: float = Field(default=5.0, gt=0.0)
    history_limit: int = Field(default=100, ge=1)
    failure_keys: FailureKeyPolicy = Field(default="attempt")

    # Logging
    log_level: LogLevelName = Field(default="error")

    # Latency thresholds (milliseconds)
    threshold_disconnected_ms: int = Field(default=3000, ge=0)
    threshold_slow_ms: int = Field(default=1000, ge=0)
    threshold_moderate_ms: int = Field(default=500, ge=0)
    threshold_fast_ms: int = Field(default=200, ge=0)
    validate_thresholds: bool = Field(default=False)

    @field_validator("check_interval")
    @classmethod
    def validate_check_interval(cls, v: timedelta) -> timedelta:
        """Reject zero or negative probe intervals."""
        if v.total_seconds() <= 0:
            raise ValueError(f"check_interval must be positive, got {v}")
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: object) -> object:
        """Accept log level names in any case (e.g. ``WARNING``)."""
        return v.lower() if isinstance(v, str) else v

    class Config:
        """Pydantic configuration."""

        env_prefix = "CONNECTIVITY_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


# Singleton configuration instance
_config: ConnectivityConfig | None = None


def get_config() -> ConnectivityConfig:
    """Get the global configuration instance.

    Returns:
        ConnectivityConfig: Configuration singleton

    Raises:
        ConfigurationError: If environment values fail validation
    """
    global _config
    if _config is None:
        try:
            _config = ConnectivityConfig()
        except ValidationError as e:
            raise ConfigurationError(f"Invalid connectivity configuration: {e}") from e
    return _config


def reset_config() -> None:
    """Drop the cached configuration so the next get_config() reloads it."""
    global _config
    _config = None
