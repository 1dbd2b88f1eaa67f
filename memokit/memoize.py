"""
Memoizing cache wrapper.

``memoize(f)`` returns a callable that computes ``f(x)`` at most once for
each distinct ``x`` and answers every later call from its cache. The
wrapped function is assumed to be pure and deterministic; nothing is ever
evicted and nothing is invalidated.

Calls are expected to be sequential. Two concurrent calls with the same
uncached key may both compute ``f(x)``; the last one to finish wins.
"""

import functools
from types import MappingProxyType
from typing import Any, Callable, Dict, Hashable, Mapping, NamedTuple, Optional

from memokit.config import get_config
from memokit.errors import NotCallableError, UnhashableKeyError
from memokit.logging import get_logger
from memokit.metrics import CacheMetrics, get_cache_metrics

_MISSING = object()


class CacheInfo(NamedTuple):
    """Statistics snapshot for a single memoizer."""
    hits: int
    misses: int
    currsize: int


class Memoized:
    """A single-argument function together with the cache it owns."""

    def __init__(self, func: Callable[[Any], Any], metrics: Optional[CacheMetrics] = None):
        if not callable(func):
            raise NotCallableError(func)

        self.func = func
        self.name = getattr(func, "__qualname__", None) or getattr(func, "__name__", None) or repr(func)
        self.metrics = metrics
        self.logger = get_logger(f"memokit.memoize.{self.name}")

        self._cache: Dict[Hashable, Any] = {}
        self._hits = 0
        self._misses = 0

        functools.update_wrapper(self, func, updated=())

    def __call__(self, key: Hashable) -> Any:
        try:
            hash(key)
        except TypeError as exc:
            raise UnhashableKeyError(self.name, key) from exc

        result = self._cache.get(key, _MISSING)
        if result is not _MISSING:
            self._hits += 1
            self.logger.debug("Cache hit", function=self.name, key=repr(key))
            if self.metrics is not None:
                self.metrics.record_hit(self.name)
            return result

        self._misses += 1
        self.logger.debug("Cache miss", function=self.name, key=repr(key))
        if self.metrics is not None:
            self.metrics.record_miss(self.name)

        try:
            result = self.func(key)
        except Exception as e:
            self.logger.debug(
                "Wrapped function failed, result not cached",
                function=self.name,
                key=repr(key),
                error=str(e)
            )
            if self.metrics is not None:
                self.metrics.record_failure(self.name, type(e).__name__)
            raise

        self._cache[key] = result
        if self.metrics is not None:
            self.metrics.set_entries(self.name, len(self._cache))
        return result

    @property
    def cache(self) -> Mapping[Hashable, Any]:
        """Read-only live view of the cache."""
        return MappingProxyType(self._cache)

    def cache_info(self) -> CacheInfo:
        """Report hits, misses and current size."""
        return CacheInfo(self._hits, self._misses, len(self._cache))

    def cache_clear(self) -> None:
        """Drop every cached result and reset the statistics."""
        self._cache.clear()
        self._hits = 0
        self._misses = 0
        if self.metrics is not None:
            self.metrics.set_entries(self.name, 0)
        self.logger.debug("Cache cleared", function=self.name)

    def __repr__(self) -> str:
        return f"<Memoized {self.name} entries={len(self._cache)}>"


def memoize(func: Optional[Callable[[Any], Any]] = None, *,
            metrics: Optional[CacheMetrics] = None) -> Any:
    """Decorator caching a single-argument function's results by argument.

    Usable bare (``@memoize``) or with options (``@memoize(metrics=...)``).
    Without an explicit collector, the process-wide one is attached when
    ``MEMOKIT_METRICS_ENABLED`` is set.
    """

    def decorator(f: Callable[[Any], Any]) -> Memoized:
        collector = metrics
        if collector is None and get_config().metrics_enabled:
            collector = get_cache_metrics()
        return Memoized(f, metrics=collector)

    if func is None:
        return decorator
    return decorator(func)
