"""Dialect Factory.

This module resolves dialect strategies from an explicit id, from a
SQLAlchemy database URL, or from the environment settings.
"""

from typing import Dict, Optional, Type, Union

from sqlalchemy.engine import make_url

from snapshot_filters.common.exceptions import dialect_not_supported_error
from snapshot_filters.constants.sql import DialectId
from snapshot_filters.dialects.base import BaseDialect
from snapshot_filters.dialects.mssql import MsSql
from snapshot_filters.dialects.standard import H2, Derby, MySql, Oracle, PostgreSql, Sqlite


class DialectFactory:
    """Factory for creating dialect strategies.

    Example:
        >>> DialectFactory.create("mssql").measure_join_hint()
        'WITH (INDEX(measures_sid_metric))'
        >>> DialectFactory.from_url("postgresql://sonar@db/sonar").id
        <DialectId.POSTGRESQL: 'postgresql'>
        >>> auto = DialectFactory.from_settings()  # id from settings, else detected from the URL
    """

    # Registry mapping DialectId to dialect class
    _registry: Dict[DialectId, Type[BaseDialect]] = {
        DialectId.DERBY: Derby,
        DialectId.H2: H2,
        DialectId.SQLITE: Sqlite,
        DialectId.MSSQL: MsSql,
        DialectId.MYSQL: MySql,
        DialectId.ORACLE: Oracle,
        DialectId.POSTGRESQL: PostgreSql,
    }

    @classmethod
    def create(cls, dialect_id: Union[DialectId, str]) -> BaseDialect:
        """Create the dialect registered under ``dialect_id``.

        Raises:
            SnapshotFilterError: If the id is unknown (DIALECT_NOT_SUPPORTED).
        """
        try:
            key = DialectId(str(getattr(dialect_id, "value", dialect_id)).lower())
        except ValueError:
            raise dialect_not_supported_error(
                str(dialect_id),
                details={"supported": [d.value for d in cls._registry]},
            )
        return cls._registry[key]()

    @classmethod
    def from_url(cls, url: str) -> BaseDialect:
        """Detect the dialect serving a SQLAlchemy URL.

        Raises:
            SnapshotFilterError: If no dialect serves the URL's backend.
        """
        backend = make_url(url).get_backend_name()
        for dialect_class in cls._registry.values():
            dialect = dialect_class()
            if dialect.matches_backend(backend):
                return dialect
        raise dialect_not_supported_error(backend, details={"url_backend": backend})

    @classmethod
    def find(cls, dialect_id: Optional[Union[DialectId, str]], url: Optional[str] = None) -> BaseDialect:
        """Resolve a dialect from an explicit id, falling back to URL detection.

        Raises:
            SnapshotFilterError: If neither the id nor the URL resolve to a dialect.
        """
        if dialect_id:
            return cls.create(dialect_id)
        if url:
            return cls.from_url(url)
        raise dialect_not_supported_error("<unset>", details={"reason": "no dialect id nor database url"})

    @classmethod
    def from_settings(cls) -> BaseDialect:
        """Resolve the dialect configured in the environment settings."""
        from snapshot_filters.settings import get_settings

        settings = get_settings()
        return cls.find(settings.dialect, settings.database.url)


def get_dialect(dialect_id: Optional[Union[DialectId, str]] = None) -> BaseDialect:
    """Get a dialect by id, or the one configured in the settings when no id is given."""
    if dialect_id is None:
        return DialectFactory.from_settings()
    return DialectFactory.create(dialect_id)


def find_dialect(dialect_id: Optional[Union[DialectId, str]], url: Optional[str] = None) -> BaseDialect:
    return DialectFactory.find(dialect_id, url)
