"""
Prometheus metrics for memoizing wrappers.
"""

import threading
from typing import Dict, Any, Optional

from prometheus_client import Counter, Gauge, CollectorRegistry


class CacheMetrics:
    """Hit, miss and failure counters shared by any number of memoizers.

    ``registry=None`` registers on the prometheus_client default registry,
    which accepts each metric name only once per process; use
    :func:`get_cache_metrics` for that case.
    """

    def __init__(self, namespace: str = "memokit", registry: Optional[CollectorRegistry] = None):
        self.namespace = namespace
        self.registry = registry
        self._metrics: Dict[str, Any] = {}
        self._setup_metrics()

    def _setup_metrics(self):
        """Set up cache metrics."""
        kwargs: Dict[str, Any] = {"namespace": self.namespace}
        if self.registry is not None:
            kwargs["registry"] = self.registry

        self._metrics["cache_hits_total"] = Counter(
            "cache_hits_total",
            "Total memoized calls answered from the cache",
            ["function"],
            **kwargs
        )

        self._metrics["cache_misses_total"] = Counter(
            "cache_misses_total",
            "Total memoized calls that invoked the wrapped function",
            ["function"],
            **kwargs
        )

        self._metrics["cache_failures_total"] = Counter(
            "cache_failures_total",
            "Total wrapped function failures, never cached",
            ["function", "error_type"],
            **kwargs
        )

        self._metrics["cache_entries"] = Gauge(
            "cache_entries",
            "Number of entries held by a memoizer",
            ["function"],
            **kwargs
        )

    def get_metric(self, name: str):
        """Get a metric by name."""
        return self._metrics.get(name)

    def record_hit(self, function: str):
        self._metrics["cache_hits_total"].labels(function=function).inc()

    def record_miss(self, function: str):
        self._metrics["cache_misses_total"].labels(function=function).inc()

    def record_failure(self, function: str, error_type: str):
        self._metrics["cache_failures_total"].labels(function=function, error_type=error_type).inc()

    def set_entries(self, function: str, count: int):
        self._metrics["cache_entries"].labels(function=function).set(count)


_global_metrics: Optional[CacheMetrics] = None
_global_lock = threading.Lock()


def get_cache_metrics() -> CacheMetrics:
    """Get the process-wide collector on the default registry."""
    global _global_metrics
    with _global_lock:
        if _global_metrics is None:
            _global_metrics = CacheMetrics()
        return _global_metrics
