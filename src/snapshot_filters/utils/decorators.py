"""Tracing decorator for the query path.

Spans are opened through the OpenTelemetry API only; without an SDK
configured by the application they are no-ops.
"""

import functools
from typing import Any, Callable, Dict, Optional, TypeVar

from opentelemetry.trace import Span, SpanKind, Status, StatusCode

from snapshot_filters.telemetry import get_tracer


F = TypeVar('F', bound=Callable[..., Any])

AttributeGetter = Callable[..., Optional[Dict[str, Any]]]


def _set_attributes(span: Span, attributes: Optional[Dict[str, Any]]) -> None:
    # None is not a valid attribute value
    for key, value in (attributes or {}).items():
        if value is not None:
            span.set_attribute(key, value)


def _safe_call(getter: AttributeGetter, *args: Any, **kwargs: Any) -> Optional[Dict[str, Any]]:
    try:
        return getter(*args, **kwargs)
    except Exception as exc:  # pragma: no cover
        from snapshot_filters.logging import get_logger
        get_logger(__name__).warning("Span attribute getter failed", extra={"error": str(exc)})
        return None


def traced(
    span_name: Optional[str] = None,
    *,
    kind: SpanKind = SpanKind.INTERNAL,
    attributes: Optional[Dict[str, Any]] = None,
    attribute_getter: Optional[AttributeGetter] = None,
    result_attributes: Optional[Callable[[Any], Optional[Dict[str, Any]]]] = None,
) -> Callable[[F], F]:
    """Run the decorated function inside an OpenTelemetry span.

    Args:
        span_name: Span name, defaults to the module-qualified function name
        kind: Span kind
        attributes: Static attributes
        attribute_getter: Called with the function arguments before the call
        result_attributes: Called with the return value after a successful call,
            e.g. to record the number of rows a query returned

    Errors are recorded on the span and re-raised unchanged. A
    ``SnapshotFilterError`` also sets ``snapshot_filters.error_code``.
    """

    def decorator(func: F) -> F:
        name = span_name or f"{func.__module__}.{func.__qualname__}"

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            tracer = get_tracer(func.__module__)
            with tracer.start_as_current_span(name, kind=kind, record_exception=False) as span:
                _set_attributes(span, attributes)
                if attribute_getter:
                    _set_attributes(span, _safe_call(attribute_getter, *args, **kwargs))

                try:
                    result = func(*args, **kwargs)
                except Exception as exc:
                    span.record_exception(exc)
                    span.set_status(Status(StatusCode.ERROR, str(exc)))
                    error_code = getattr(exc, "error_code", None)
                    if error_code is not None:
                        span.set_attribute("snapshot_filters.error_code", error_code.value)
                    raise

                if result_attributes:
                    _set_attributes(span, _safe_call(result_attributes, result))
                return result

        return wrapper  # type: ignore[return-value]

    return decorator
