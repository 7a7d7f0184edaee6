"""Unit tests for environment-driven configuration."""

from datetime import timedelta

import pytest
from pydantic import ValidationError

from connectivity.config import ConnectivityConfig, get_config, reset_config
from connectivity.exceptions import ConfigurationError


class TestConnectivityConfig:
    """Test defaults, environment loading and validation."""

    def test_defaults(self):
        config = ConnectivityConfig(_env_file=None)

        assert config.endpoint == "https://example.com"
        assert config.check_interval == timedelta(seconds=3)
        assert config.allowed_failed_requests == 2
        assert config.history_limit == 100
        assert config.log_level == "error"
        assert config.failure_keys == "attempt"
        assert (
            config.threshold_fast_ms,
            config.threshold_moderate_ms,
            config.threshold_slow_ms,
            config.threshold_disconnected_ms,
        ) == (200, 500, 1000, 3000)
        assert config.validate_thresholds is False

    def test_loads_prefixed_environment(self, monkeypatch):
        monkeypatch.setenv("CONNECTIVITY_ENDPOINT", "https://status.test/ping")
        monkeypatch.setenv("CONNECTIVITY_CHECK_INTERVAL", "PT10S")
        monkeypatch.setenv("CONNECTIVITY_ALLOWED_FAILED_REQUESTS", "4")
        monkeypatch.setenv("CONNECTIVITY_LOG_LEVEL", "WARNING")
        monkeypatch.setenv("CONNECTIVITY_FAILURE_KEYS", "last_success")

        config = ConnectivityConfig(_env_file=None)

        assert config.endpoint == "https://status.test/ping"
        assert config.check_interval == timedelta(seconds=10)
        assert config.allowed_failed_requests == 4
        assert config.log_level == "warning"
        assert config.failure_keys == "last_success"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"allowed_failed_requests": 0},
            {"history_limit": 0},
            {"check_interval": timedelta(0)},
            {"log_level": "verbose"},
            {"failure_keys": "random"},
            {"port": 80},
        ],
    )
    def test_rejects_invalid_values(self, overrides):
        with pytest.raises(ValidationError):
            ConnectivityConfig(_env_file=None, **overrides)

    def test_get_config_is_cached(self, monkeypatch):
        reset_config()
        monkeypatch.setenv("CONNECTIVITY_HISTORY_LIMIT", "25")
        try:
            first = get_config()
            assert first.history_limit == 25
            assert get_config() is first
        finally:
            reset_config()

    def test_get_config_wraps_validation_errors(self, monkeypatch):
        reset_config()
        monkeypatch.setenv("CONNECTIVITY_ALLOWED_FAILED_REQUESTS", "0")
        try:
            with pytest.raises(ConfigurationError):
                get_config()
        finally:
            reset_config()
