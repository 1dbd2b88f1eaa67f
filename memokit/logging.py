"""
Shared logging configuration for memokit.
"""

import sys
import structlog
import logging
from typing import Any, Dict, Optional

from opentelemetry import trace

from memokit.config import LOG_LEVELS, get_config

_LOG_FORMATS = ("console", "json")
_environment: Optional[str] = None


def configure_logging(log_level: Optional[str] = None,
                      log_format: Optional[str] = None,
                      env: Optional[str] = None) -> None:
    """Configure structlog and the standard library root logger.

    Opt-in: memokit never calls this itself.

    Arguments left as ``None`` are read from :class:`memokit.config.MemoKitConfig`.
    """
    global _environment

    if log_level is None or log_format is None or env is None:
        config = get_config()
        log_level = log_level or config.log_level
        log_format = log_format or config.log_format
        env = env or config.env

    log_level = log_level.lower()
    if log_level not in LOG_LEVELS:
        raise ValueError(f"log_level must be one of {LOG_LEVELS}, got {log_level!r}")
    if log_format not in _LOG_FORMATS:
        raise ValueError(f"log_format must be one of {_LOG_FORMATS}, got {log_format!r}")

    _environment = env

    if log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            add_environment_context,
            add_trace_context,
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    level = getattr(logging, log_level.upper())
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )
    # basicConfig is a no-op once the root logger has handlers
    logging.getLogger("memokit").setLevel(level)


def add_environment_context(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Add the deployment environment to log events."""
    if _environment:
        event_dict.setdefault("env", _environment)
    return event_dict


def add_trace_context(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Add trace context to log events."""
    current_span = trace.get_current_span()
    if current_span and current_span.is_recording():
        span_context = current_span.get_span_context()
        if span_context.trace_id != 0:
            event_dict["trace_id"] = f"{span_context.trace_id:032x}"
        if span_context.span_id != 0:
            event_dict["span_id"] = f"{span_context.span_id:016x}"

    return event_dict


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Events go to the standard library logger ``name``, so the host
    application's logging setup decides what is shown. Nothing is configured
    here; call :func:`configure_logging` to opt in to memokit's setup.
    """
    return structlog.wrap_logger(logging.getLogger(name))
