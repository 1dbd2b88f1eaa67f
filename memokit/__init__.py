"""
Function wrappers for memoization and call tracing.

This package aggregates:

- memoize: Memoizing cache wrapper for single-argument pure functions
- tracing: Call/return notifications with OpenTelemetry spans
- fibonacci: Recursive Fibonacci, plain and with composed wrappers
- config: Settings via pydantic-settings
- logging: Structured logging with trace correlation
- metrics: Prometheus cache counters
- errors: Library error types
"""

from memokit.errors import (
    ConfigurationError,
    MemoKitError,
    NotCallableError,
    UnhashableKeyError,
)
from memokit.fibonacci import fib, make_fib
from memokit.memoize import CacheInfo, Memoized, memoize
from memokit.tracing import TraceEvent, log_notification, trace

__all__ = [
    "CacheInfo",
    "ConfigurationError",
    "MemoKitError",
    "Memoized",
    "NotCallableError",
    "TraceEvent",
    "UnhashableKeyError",
    "fib",
    "log_notification",
    "make_fib",
    "memoize",
    "trace",
]
