"""Common exceptions for snapshot-filters.

Exception Design:
    The exception system uses error codes for categorization rather than
    numerous specific exception classes. All exceptions inherit from
    SnapshotFilterError and include structured error information.
"""

from snapshot_filters.common.exceptions import (
    ErrorCode,
    SnapshotFilterError,
    # Helper functions
    connection_error,
    dialect_not_supported_error,
    query_execution_error,
)

__all__ = [
    # Base Exception and Error Codes
    "SnapshotFilterError",
    "ErrorCode",
    # Helper functions
    "connection_error",
    "query_execution_error",
    "dialect_not_supported_error",
]
