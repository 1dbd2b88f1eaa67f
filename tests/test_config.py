"""
Unit tests for configuration loading.
"""

import pytest

from memokit.config import MemoKitConfig, get_config
from memokit.errors import ConfigurationError


class TestConfig:
    """Test cases for MemoKitConfig and get_config."""

    def test_defaults(self):
        """Test default settings."""
        config = get_config()

        assert isinstance(config, MemoKitConfig)
        assert config.env == "local"
        assert config.log_level == "info"
        assert config.log_format == "console"
        assert config.trace_enabled is True
        assert config.trace_max_repr == 80
        assert config.metrics_enabled is False

    def test_environment_overrides(self, monkeypatch):
        """Test MEMOKIT_* variables are read."""
        monkeypatch.setenv("MEMOKIT_ENV", "ci")
        monkeypatch.setenv("MEMOKIT_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("MEMOKIT_LOG_FORMAT", "json")
        monkeypatch.setenv("MEMOKIT_TRACE_ENABLED", "false")
        monkeypatch.setenv("MEMOKIT_TRACE_MAX_REPR", "32")
        monkeypatch.setenv("MEMOKIT_METRICS_ENABLED", "true")

        config = get_config()

        assert config.env == "ci"
        assert config.log_level == "debug"
        assert config.log_format == "json"
        assert config.trace_enabled is False
        assert config.trace_max_repr == 32
        assert config.metrics_enabled is True

    def test_keyword_overrides(self, monkeypatch):
        """Test explicit overrides win over the environment."""
        monkeypatch.setenv("MEMOKIT_LOG_LEVEL", "error")

        assert get_config(log_level="warning").log_level == "warning"

    def test_invalid_log_level(self, monkeypatch):
        """Test unknown log levels are rejected."""
        monkeypatch.setenv("MEMOKIT_LOG_LEVEL", "loud")

        with pytest.raises(ConfigurationError) as exc_info:
            get_config()

        assert isinstance(exc_info.value, ValueError)
        assert exc_info.value.code == "CONFIGURATION_ERROR"
        fields = [error["field"] for error in exc_info.value.details["errors"]]
        assert fields == ["log_level"]

    @pytest.mark.parametrize("overrides", [
        {"trace_max_repr": 3},
        {"log_format": "xml"},
    ])
    def test_invalid_values(self, overrides):
        """Test out-of-range values are rejected."""
        with pytest.raises(ConfigurationError):
            get_config(**overrides)
