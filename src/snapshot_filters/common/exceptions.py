from enum import Enum
from typing import Any, Dict, Optional

# Statements are cut to this length in error details
MAX_QUERY_DETAIL_LENGTH = 500


class ErrorCode(Enum):
    """Error codes of snapshot-filters.

    Errors are told apart by code instead of by exception class. The prefix
    names the area:

        CONNECTION_*: the snapshot store could not be reached
        EXECUTION_*: a statement failed on the snapshot store
        PLATFORM_*: no SQL dialect matches the configuration
    """
    CONNECTION_ERROR = "CONNECTION_001"

    EXECUTION_ERROR = "EXECUTION_001"
    QUERY_EXECUTION_ERROR = "EXECUTION_002"

    DIALECT_NOT_SUPPORTED = "PLATFORM_001"


class SnapshotFilterError(Exception):
    """Single exception type raised by snapshot-filters.

    The error is logged at ERROR level when it is created, with its code and
    details as structured fields, so callers that only re-raise do not need
    to log it again.

    Attributes:
        message: Human readable message
        error_code: Category of the error
        details: Structured context (failing statement, dialect, url...)
        cause: Underlying exception, also exposed as ``__cause__``
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.EXECUTION_ERROR,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

        # Imported here, logging depends on this module's package
        from snapshot_filters.logging import get_logger
        get_logger(__name__).error(
            message,
            extra={"error_code": error_code.value, "details": self.details},
            exc_info=cause,
        )

    def __str__(self) -> str:
        text = f"[{self.error_code.value}] {self.message}"
        if self.cause is not None:
            text += f" (caused by: {type(self.cause).__name__}: {self.cause})"
        return text

    def to_dict(self) -> Dict[str, Any]:
        """Serializable form, e.g. for an API error payload."""
        return {
            "type": type(self).__name__,
            "message": self.message,
            "error_code": self.error_code.value,
            "error_name": self.error_code.name,
            "details": self.details,
        }


def _error(
    error_code: ErrorCode,
    message: str,
    context: Dict[str, Any],
    details: Optional[Dict[str, Any]] = None,
    cause: Optional[Exception] = None,
) -> SnapshotFilterError:
    merged = dict(details or {})
    merged.update({k: v for k, v in context.items() if v is not None})
    return SnapshotFilterError(message, error_code=error_code, details=merged, cause=cause)


def connection_error(
    message: str,
    service: Optional[str] = None,
    url: Optional[str] = None,
    **kwargs
) -> SnapshotFilterError:
    """The snapshot store could not be reached (CONNECTION_ERROR).

    Args:
        message: Error message
        service: Database backend, e.g. ``mssql``
        url: Database URL with the password masked
    """
    return _error(ErrorCode.CONNECTION_ERROR, message, {"service": service, "url": url}, **kwargs)


def query_execution_error(query: str, original_error: Exception, **kwargs) -> SnapshotFilterError:
    """A statement failed (QUERY_EXECUTION_ERROR).

    The statement is kept in ``details["query"]``, truncated to
    ``MAX_QUERY_DETAIL_LENGTH`` characters; ``original_error`` becomes the cause.
    """
    if len(query) > MAX_QUERY_DETAIL_LENGTH:
        query = query[:MAX_QUERY_DETAIL_LENGTH] + "..."
    kwargs.pop("cause", None)
    return _error(
        ErrorCode.QUERY_EXECUTION_ERROR,
        f"Query execution failed: {original_error}",
        {"query": query},
        cause=original_error,
        **kwargs
    )


def dialect_not_supported_error(dialect: str, **kwargs) -> SnapshotFilterError:
    """No dialect is registered for an id or URL backend (DIALECT_NOT_SUPPORTED)."""
    return _error(
        ErrorCode.DIALECT_NOT_SUPPORTED,
        f"Dialect '{dialect}' is not supported",
        {"dialect": dialect},
        **kwargs
    )
