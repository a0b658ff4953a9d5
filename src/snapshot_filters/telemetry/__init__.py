"""OpenTelemetry helpers for instrumentation.

The package depends on ``opentelemetry-api`` only. Spans become visible
once the application installs an SDK tracer provider.
"""

from typing import Optional

from opentelemetry import trace

from snapshot_filters.__version__ import __version__

INSTRUMENTATION_NAME = "snapshot_filters"

__all__ = [
    "INSTRUMENTATION_NAME",
    "get_tracer",
]


def get_tracer(name: Optional[str] = None) -> trace.Tracer:
    """Return a tracer tagged with the package version.

    Args:
        name: Instrumenting module, defaults to the package name
    """
    return trace.get_tracer(name or INSTRUMENTATION_NAME, __version__)
