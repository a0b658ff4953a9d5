"""SQL and query-related constants.

This module contains the comparison operators, sort modes and dialect
identifiers used across the filter model, the query builder and the
executor. They live in Layer 0 so that any layer can use them without
creating circular dependencies.
"""

from enum import Enum


class ComparisonOperator(str, Enum):
    """Comparison operators accepted by criteria.

    The value is the exact SQL token rendered into the statement, so only
    members of this enum ever reach the generated SQL.
    """

    GREATER = ">"
    LESS = "<"
    GREATER_OR_EQUAL = ">="
    LESS_OR_EQUAL = "<="
    EQUAL = "="


class SortMode(str, Enum):
    """Row ordering applied to a filter result.

    At most one mode is active for a given filter; NONE leaves the order to
    the database (only the snapshot id tie-breaker is applied).
    """

    NONE = "none"
    NAME = "name"
    KEY = "key"
    DATE = "date"
    LANGUAGE = "language"
    VERSION = "version"
    METRIC = "metric"


class DialectId(str, Enum):
    """Identifiers of the supported SQL dialects."""

    DERBY = "derby"
    H2 = "h2"
    SQLITE = "sqlite"
    MSSQL = "mssql"
    MYSQL = "mysql"
    ORACLE = "oracle"
    POSTGRESQL = "postgresql"


# Range of variation columns available on project_measures
MIN_PERIOD_INDEX = 1
MAX_PERIOD_INDEX = 5
