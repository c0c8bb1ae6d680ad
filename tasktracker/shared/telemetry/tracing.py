"""Span decorator and attribute helper for store operations."""

import asyncio
from collections.abc import Callable, Sequence
from functools import wraps
from typing import Any

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

from tasktracker.shared.telemetry.telemetry import get_tracer

AttributeValue = str | int | float | bool | Sequence[str]


def _fail(span: trace.Span, exc: Exception) -> None:
    span.set_status(Status(StatusCode.ERROR, str(exc)))
    span.record_exception(exc)


def traced(operation_name: str | None = None) -> Callable:
    """Run the decorated function (sync or async) inside a span.

    The span is named operation_name (default: module.function). Exceptions
    mark the span as failed and propagate. Callers add what the span is
    about with add_span_attributes(); arguments are never recorded
    automatically.
    """

    def decorator(func: Callable) -> Callable:
        span_name = operation_name or f"{func.__module__}.{func.__name__}"

        if asyncio.iscoroutinefunction(func):

            @wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                with get_tracer(func.__module__).start_as_current_span(
                    span_name, record_exception=False, set_status_on_exception=False
                ) as span:
                    try:
                        return await func(*args, **kwargs)
                    except Exception as e:
                        _fail(span, e)
                        raise

            return async_wrapper

        @wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            with get_tracer(func.__module__).start_as_current_span(
                span_name, record_exception=False, set_status_on_exception=False
            ) as span:
                try:
                    return func(*args, **kwargs)
                except Exception as e:
                    _fail(span, e)
                    raise

        return sync_wrapper

    return decorator


def add_span_attributes(**attributes: AttributeValue) -> None:
    """Set attributes on the current span as task.<name>; no-op when not recording."""
    span = trace.get_current_span()
    if not span.is_recording():
        return
    for key, value in attributes.items():
        if isinstance(value, Sequence) and not isinstance(value, str):
            value = list(value)
        span.set_attribute(f"task.{key}", value)
