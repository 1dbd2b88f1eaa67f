"""
Unit tests for cache metrics.
"""

import pytest
from prometheus_client import CollectorRegistry

from memokit.memoize import memoize
from memokit.metrics import CacheMetrics, get_cache_metrics


class TestCacheMetrics:
    """Test cases for CacheMetrics."""

    @pytest.fixture
    def registry(self):
        return CollectorRegistry()

    @pytest.fixture
    def metrics(self, registry):
        return CacheMetrics(registry=registry)

    def test_metrics_registered(self, metrics):
        """Test all cache metrics exist."""
        for name in ("cache_hits_total", "cache_misses_total", "cache_failures_total", "cache_entries"):
            assert metrics.get_metric(name) is not None

        assert metrics.get_metric("unknown") is None

    def test_memoizer_records_hits_and_misses(self, metrics, registry):
        """Test a memoizer reports through its collector."""
        g = memoize(lambda x: x + 1, metrics=metrics)

        g(1)
        g(1)
        g(1)
        g(2)

        labels = {"function": g.name}
        assert registry.get_sample_value("memokit_cache_hits_total", labels) == 2.0
        assert registry.get_sample_value("memokit_cache_misses_total", labels) == 2.0
        assert registry.get_sample_value("memokit_cache_entries", labels) == 2.0

    def test_memoizer_records_failures(self, metrics, registry):
        """Test failures are counted by error type."""

        def invert(x):
            return 1 / x

        g = memoize(invert, metrics=metrics)

        with pytest.raises(ZeroDivisionError):
            g(0)

        assert registry.get_sample_value(
            "memokit_cache_failures_total",
            {"function": g.name, "error_type": "ZeroDivisionError"}
        ) == 1.0

    def test_cache_clear_resets_entries(self, metrics, registry):
        """Test clearing sets the entries gauge to zero."""
        g = memoize(lambda x: x, metrics=metrics)
        g(1)

        g.cache_clear()

        assert registry.get_sample_value("memokit_cache_entries", {"function": g.name}) == 0.0

    def test_global_collector_is_shared(self):
        """Test the process-wide collector is created once."""
        assert get_cache_metrics() is get_cache_metrics()

    def test_metrics_enabled_from_environment(self, monkeypatch):
        """Test MEMOKIT_METRICS_ENABLED attaches the global collector."""
        monkeypatch.setenv("MEMOKIT_METRICS_ENABLED", "true")

        g = memoize(lambda x: x)

        assert g.metrics is get_cache_metrics()

    def test_metrics_disabled_by_default(self):
        """Test memoizers carry no collector unless asked."""
        assert memoize(lambda x: x).metrics is None
