"""Filter execution: compile a filter for a dialect and run it."""

from snapshot_filters.executor.factory import get_filter_executor
from snapshot_filters.executor.filter_executor import FilterExecutor

__all__ = [
    "FilterExecutor",
    "get_filter_executor",
]
