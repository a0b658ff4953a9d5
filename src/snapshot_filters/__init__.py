from snapshot_filters.__version__ import __version__

from snapshot_filters.model import (
    Filter,
    FilterSpec,
    DateCriterion,
    MeasureCriterion,
    FilterResult,
)
from snapshot_filters.constants import Qualifier, Scope, SortMode, DialectId

from snapshot_filters.dialects import BaseDialect, get_dialect
from snapshot_filters.executor import FilterExecutor, get_filter_executor
from snapshot_filters.session import SQLAlchemySession
from snapshot_filters.protocols import QuerySession

from snapshot_filters.common.exceptions import SnapshotFilterError, ErrorCode
from snapshot_filters.logging import setup_logging


__all__ = [
    "__version__",

    # Filter model
    "Filter",
    "FilterSpec",
    "DateCriterion",
    "MeasureCriterion",
    "FilterResult",

    # Codes
    "Qualifier",
    "Scope",
    "SortMode",
    "DialectId",

    # Execution
    "BaseDialect",
    "get_dialect",
    "FilterExecutor",
    "get_filter_executor",
    "SQLAlchemySession",
    "QuerySession",

    # Exceptions (public API)
    "SnapshotFilterError",
    "ErrorCode",

    "setup_logging",
]
