"""Factory building a ``FilterExecutor`` from the environment settings."""

from typing import Optional

from snapshot_filters.dialects.base import BaseDialect
from snapshot_filters.dialects.factory import DialectFactory
from snapshot_filters.executor.filter_executor import FilterExecutor
from snapshot_filters.logging import get_logger
from snapshot_filters.protocols.session import QuerySession
from snapshot_filters.settings import get_settings

logger = get_logger(__name__)


def get_filter_executor(
    session: Optional[QuerySession] = None,
    dialect: Optional[BaseDialect] = None,
) -> FilterExecutor:
    """Create an executor wired to the configured database.

    Args:
        session: Session to use, defaults to a ``SQLAlchemySession`` on
            ``settings.database``
        dialect: Dialect to render for, defaults to ``settings.dialect`` or
            the dialect detected from ``settings.database.url``

    Raises:
        SnapshotFilterError: If the dialect cannot be resolved
    """
    settings = get_settings()
    if dialect is None:
        dialect = DialectFactory.find(settings.dialect, settings.database.url)
    if session is None:
        from snapshot_filters.session import SQLAlchemySession
        session = SQLAlchemySession(settings.database)

    logger.debug("Filter executor created", extra={"dialect": dialect.name})
    return FilterExecutor(session, dialect)
