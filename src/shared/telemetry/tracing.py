"""Span helpers for use-case code"""
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any, TypeVar

from opentelemetry import trace

# A proxy tracer: spans go to whichever provider is installed at call time
tracer = trace.get_tracer("timeline_bridge")

R = TypeVar("R")


def traced(span_name: str):
    """
    Run a coroutine function inside a span.

    Usage:
        @traced("timeline.aggregate")
        async def aggregate(self, ref: TimelineRef) -> AggregatedTimeline:
            ...

    An exception leaving the function is recorded on the span, which is
    marked as failed, and re-raised unchanged.
    """

    def decorator(func: Callable[..., Awaitable[R]]) -> Callable[..., Awaitable[R]]:
        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> R:
            with tracer.start_as_current_span(span_name):
                return await func(*args, **kwargs)

        return wrapper

    return decorator


def add_span_attributes(**attributes: Any) -> None:
    """Attach attributes to the current span, if it is being recorded"""
    span = trace.get_current_span()
    if span.is_recording():
        span.set_attributes(attributes)


def current_trace_id() -> str | None:
    """Hex trace id of the current span, None outside a trace"""
    context = trace.get_current_span().get_span_context()
    if not context.is_valid:
        return None
    return format(context.trace_id, "032x")
