"""Dialects rendering plain ANSI SQL.

None of these databases needs a hint on the measure joins; they only
differ by identity and by the SQLAlchemy backends they are detected from.
MySQL also writes the LIKE escape literal differently.
Derby and H2 are embedded Java databases; they have no
SQLAlchemy backend and can only be selected by id.
"""

from snapshot_filters.constants.sql import DialectId
from snapshot_filters.dialects.base import BaseDialect


class Derby(BaseDialect):

    @property
    def id(self) -> DialectId:
        return DialectId.DERBY


class H2(BaseDialect):

    @property
    def id(self) -> DialectId:
        return DialectId.H2


class Sqlite(BaseDialect):
    url_backends = ("sqlite",)

    @property
    def id(self) -> DialectId:
        return DialectId.SQLITE


class MySql(BaseDialect):
    url_backends = ("mysql", "mariadb")

    @property
    def id(self) -> DialectId:
        return DialectId.MYSQL

    def like_escape_clause(self) -> str:
        # Backslash starts an escape sequence in MySQL string literals
        return "ESCAPE '\\\\'"


class Oracle(BaseDialect):
    url_backends = ("oracle",)

    @property
    def id(self) -> DialectId:
        return DialectId.ORACLE


class PostgreSql(BaseDialect):
    url_backends = ("postgresql",)

    @property
    def id(self) -> DialectId:
        return DialectId.POSTGRESQL
