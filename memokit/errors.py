"""
Error types raised by memokit itself.

Failures of a wrapped function are never converted into these; they
propagate to the caller unchanged.
"""

from typing import Dict, Any, Optional
from pydantic import BaseModel, Field

from opentelemetry import trace


class ErrorReport(BaseModel):
    """Structured description of a memokit error."""

    trace_id: Optional[str] = None
    code: str
    message: str
    details: Dict[str, Any] = Field(default_factory=dict)


class MemoKitError(Exception):
    """Base exception for memokit."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_report(self) -> ErrorReport:
        """Convert to an error report."""
        trace_id = None
        current_span = trace.get_current_span()
        if current_span and current_span.is_recording():
            span_context = current_span.get_span_context()
            if span_context.trace_id != 0:
                trace_id = f"{span_context.trace_id:032x}"

        return ErrorReport(
            trace_id=trace_id,
            code=self.code,
            message=self.message,
            details=self.details
        )


class UnhashableKeyError(MemoKitError, TypeError):
    """A memoized function was called with an argument that cannot be a cache key."""

    def __init__(self, function: str, key: Any):
        super().__init__(
            "UNHASHABLE_KEY",
            f"{function}: argument of type {type(key).__name__} is unhashable and cannot be cached",
            {"function": function, "key_type": type(key).__name__}
        )


class NotCallableError(MemoKitError, TypeError):
    """A wrapper was applied to something that is not callable."""

    def __init__(self, obj: Any):
        super().__init__(
            "NOT_CALLABLE",
            f"Expected a callable, got {type(obj).__name__}",
            {"type": type(obj).__name__}
        )


class ConfigurationError(MemoKitError, ValueError):
    """Configuration errors."""

    def __init__(self, message: str = "Invalid configuration", details: Optional[Dict[str, Any]] = None):
        super().__init__("CONFIGURATION_ERROR", message, details)
