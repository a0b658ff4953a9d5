"""Context injection for log records.

Two kinds of context end up on every record that goes through
``ContextFilter``:

    - per-request values (request id, user id) held in context variables,
      so concurrent requests served by threads or tasks stay separate
    - process-wide static values set once with ``set_logging_context``
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Dict, Iterator, Optional

from snapshot_filters.__version__ import __version__

SDK_NAME = "snapshot-filters"

request_id_var: ContextVar[Optional[str]] = ContextVar("snapshot_filters_request_id", default=None)
user_id_var: ContextVar[Optional[str]] = ContextVar("snapshot_filters_user_id", default=None)

_static_context: Dict[str, Any] = {}


class ContextFilter(logging.Filter):
    """Adds request and static context to each record; never drops a record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get()
        record.user_id = user_id_var.get()
        record.sdk_name = SDK_NAME
        record.package_version = __version__
        for key, value in _static_context.items():
            setattr(record, key, value)
        return True


def set_logging_context(
    environment: Optional[str] = None,
    extra: Optional[Dict[str, Any]] = None,
) -> None:
    """Replace the static attributes attached to every record.

    Args:
        environment: Deployment environment name, omitted when None
        extra: Additional static attributes
    """
    _static_context.clear()
    if environment is not None:
        _static_context["environment"] = environment
    _static_context.update(extra or {})


def set_request_context(
    request_id: Optional[str] = None,
    user_id: Optional[str] = None,
) -> None:
    """Set request context variables; None leaves a value unchanged."""
    if request_id is not None:
        request_id_var.set(request_id)
    if user_id is not None:
        user_id_var.set(user_id)


def clear_request_context() -> None:
    request_id_var.set(None)
    user_id_var.set(None)


@contextmanager
def request_context(request_id: Optional[str] = None, user_id: Optional[str] = None) -> Iterator[None]:
    """Scope request context to a block and restore the previous values on exit.

    Example:
        >>> with request_context(request_id="req-42", user_id="admin"):
        ...     executor.execute(a_filter)
    """
    request_token = request_id_var.set(request_id)
    user_token = user_id_var.set(user_id)
    try:
        yield
    finally:
        user_id_var.reset(user_token)
        request_id_var.reset(request_token)
