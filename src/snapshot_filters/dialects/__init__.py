"""SQL dialect strategies.

A dialect tells the query renderer how a given database differs from plain
ANSI SQL. Only SQL Server currently needs something special: an index hint
on every join against ``project_measures``.

Available Dialects:
    - Derby, H2: embedded databases (selected by id only)
    - Sqlite: embedded database used by tests and local deployments
    - MsSql: SQL Server, renders ``WITH (INDEX(measures_sid_metric))``
    - MySql, Oracle, PostgreSql

Example:
    >>> from snapshot_filters.dialects import get_dialect
    >>> get_dialect("derby").measure_join_hint() is None
    True
"""

from snapshot_filters.dialects.base import BaseDialect
from snapshot_filters.dialects.factory import DialectFactory, find_dialect, get_dialect
from snapshot_filters.dialects.mssql import MsSql
from snapshot_filters.dialects.standard import H2, Derby, MySql, Oracle, PostgreSql, Sqlite

__all__ = [
    "BaseDialect",
    "DialectFactory",
    "get_dialect",
    "find_dialect",
    "Derby",
    "H2",
    "Sqlite",
    "MsSql",
    "MySql",
    "Oracle",
    "PostgreSql",
]
