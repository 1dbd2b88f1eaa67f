"""Tracing wrapper: announce each call before it runs and its result after."""

import functools
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Tuple

from opentelemetry import trace as otel_trace
from opentelemetry.trace import Status, StatusCode, TracerProvider

from memokit.config import MemoKitConfig, get_config
from memokit.errors import NotCallableError
from memokit.logging import get_logger

CALL = "call"
RETURN = "return"
RAISE = "raise"

_depth_var: ContextVar[int] = ContextVar("memokit_trace_depth", default=0)

_NO_RESULT = object()


def _short_repr(value: Any, max_length: int) -> str:
    text = repr(value)
    if len(text) > max_length:
        return text[:max_length - 3] + "..."
    return text


@dataclass
class TraceEvent:
    """One notification emitted around a traced call."""
    phase: str
    function: str
    args: Tuple[Any, ...] = ()
    kwargs: Dict[str, Any] = field(default_factory=dict)
    result: Any = _NO_RESULT
    error: Optional[BaseException] = None
    depth: int = 0
    max_repr: int = 80

    def signature(self) -> str:
        """Render the call as ``name(arg, key=value)``."""
        parts = [_short_repr(arg, self.max_repr) for arg in self.args]
        parts.extend(f"{key}={_short_repr(value, self.max_repr)}" for key, value in self.kwargs.items())
        return f"{self.function}({', '.join(parts)})"

    def render(self) -> str:
        indent = "  " * self.depth
        if self.phase == RETURN:
            return f"{indent}{self.signature()} -> {_short_repr(self.result, self.max_repr)}"
        if self.phase == RAISE:
            return f"{indent}{self.signature()} !! {_short_repr(self.error, self.max_repr)}"
        return f"{indent}{self.signature()}"


def log_notification(event: TraceEvent) -> None:
    """Default sink: write the rendered event to the ``memokit.tracing`` logger.

    Shown only if the host application enables INFO for that logger, or has
    called :func:`memokit.logging.configure_logging`.
    """
    logger = get_logger("memokit.tracing")
    if event.phase == RAISE:
        logger.warning(event.render(), phase=event.phase, function=event.function, depth=event.depth)
    else:
        logger.info(event.render(), phase=event.phase, function=event.function, depth=event.depth)


def trace(func: Optional[Callable] = None, *,
          sink: Optional[Callable[[TraceEvent], Any]] = None,
          config: Optional[MemoKitConfig] = None,
          tracer_provider: Optional[TracerProvider] = None) -> Any:
    """Decorator emitting a notification before and after every call.

    The ``call`` notification strictly precedes the inner call and the
    ``return`` notification strictly follows it. A failing call emits
    ``raise`` instead of ``return`` and re-raises unchanged. Each call also
    runs inside an OpenTelemetry span.
    """
    settings = config or get_config()
    emit = sink or log_notification

    def decorator(f: Callable) -> Callable:
        if not callable(f):
            raise NotCallableError(f)
        if not settings.trace_enabled:
            return f

        name = getattr(f, "__name__", None) or repr(f)
        module = getattr(f, "__module__", None) or "unknown"
        tracer = otel_trace.get_tracer("memokit.tracing", tracer_provider=tracer_provider)

        @functools.wraps(f)
        def wrapper(*args, **kwargs):
            depth = _depth_var.get()
            event_fields = dict(
                function=name,
                args=args,
                kwargs=kwargs,
                depth=depth,
                max_repr=settings.trace_max_repr,
            )

            with tracer.start_as_current_span(name) as span:
                span.set_attribute("function.name", name)
                span.set_attribute("function.module", module)
                span.set_attribute("trace.depth", depth)

                emit(TraceEvent(phase=CALL, **event_fields))
                token = _depth_var.set(depth + 1)
                try:
                    result = f(*args, **kwargs)
                except BaseException as exc:
                    span.set_status(Status(StatusCode.ERROR, str(exc)))
                    span.set_attribute("error", True)
                    span.set_attribute("error.message", str(exc))
                    emit(TraceEvent(phase=RAISE, error=exc, **event_fields))
                    raise
                finally:
                    _depth_var.reset(token)

                span.set_status(Status(StatusCode.OK))
                emit(TraceEvent(phase=RETURN, result=result, **event_fields))
                return result

        return wrapper

    if func is None:
        return decorator
    return decorator(func)
