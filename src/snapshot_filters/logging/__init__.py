"""Logging infrastructure for snapshot-filters.

This module provides structured logging with JSON output and context
tracking. Library code only calls ``get_logger``; applications opt in to the
JSON console handler through ``setup_logging``.
"""

from snapshot_filters.logging.filters import (
    ContextFilter,
    clear_request_context,
    request_context,
    set_logging_context,
    set_request_context,
)
from snapshot_filters.logging.logger import CustomJsonFormatter, get_logger, setup_logging

__all__ = [
    "get_logger",
    "setup_logging",
    "CustomJsonFormatter",
    "ContextFilter",
    "set_logging_context",
    "set_request_context",
    "clear_request_context",
    "request_context",
]
