"""Intermediate representation of a filter query.

The compiler turns a ``FilterSpec`` into a ``QueryPlan`` made of the typed
nodes below; the renderer turns the plan into dialect-specific SQL text.
Nodes only reference fixed table aliases and named parameters, never caller
supplied text, so every literal value reaches the database as a bound
parameter.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union


class JoinKind(str, Enum):
    INNER = "INNER JOIN"
    LEFT_OUTER = "LEFT OUTER JOIN"


@dataclass(frozen=True)
class ColumnEquals:
    """``left = right`` between two column references."""
    left: str
    right: str


@dataclass(frozen=True)
class Comparison:
    """``column <operator> :param``."""
    column: str
    operator: str
    param: str


@dataclass(frozen=True)
class InList:
    """``column IN (:p0, :p1, ...)``."""
    column: str
    params: Tuple[str, ...]


@dataclass(frozen=True)
class IsNull:
    column: str
    negated: bool = False


@dataclass(frozen=True)
class GlobMatch:
    """Case-insensitive ``*`` glob on a column.

    The parameter value is derived from ``glob`` at render time, because the
    wildcard and the case-folding function belong to the dialect.
    """
    column: str
    param: str
    glob: str


@dataclass(frozen=True)
class PrefixMatch:
    """Case-sensitive ``column LIKE :param`` where the value is ``prefix`` followed by the wildcard."""
    column: str
    param: str
    prefix: str


@dataclass(frozen=True)
class AlwaysFalse:
    """Predicate matching no row."""


Condition = Union[ColumnEquals, Comparison, InList, IsNull, GlobMatch, PrefixMatch, AlwaysFalse]


@dataclass(frozen=True)
class SelectColumn:
    expression: str
    alias: str


@dataclass(frozen=True)
class TableJoin:
    """A join against ``table``.

    Attributes:
        kind: INNER or LEFT OUTER
        table: Joined table name
        alias: Alias referenced by the conditions
        conditions: AND-combined ON conditions
        measures_join: Whether the join targets ``project_measures``; the
            dialect's measure hint is rendered right after such tables
    """
    kind: JoinKind
    table: str
    alias: str
    conditions: Tuple[Condition, ...]
    measures_join: bool = False


@dataclass(frozen=True)
class OrderTerm:
    """One ORDER BY key.

    Attributes:
        expression: Column expression to sort on
        ascending: Sort direction
        nulls_last: Sort NULLs after non-NULL values whatever the direction
    """
    expression: str
    ascending: bool = True
    nulls_last: bool = False


@dataclass
class QueryPlan:
    """Structured form of a filter query, independent of any dialect."""
    from_table: str
    from_alias: str
    columns: List[SelectColumn] = field(default_factory=list)
    joins: List[TableJoin] = field(default_factory=list)
    predicates: List[Condition] = field(default_factory=list)
    order_by: List[OrderTerm] = field(default_factory=list)
    params: Dict[str, Any] = field(default_factory=dict)

    @property
    def column_names(self) -> Tuple[str, ...]:
        return tuple(c.alias for c in self.columns)

    def measure_joins(self) -> List[TableJoin]:
        return [j for j in self.joins if j.measures_join]

    def bind(self, name: str, value: Any) -> str:
        """Register a parameter value and return its name."""
        if name in self.params:
            raise ValueError(f"Parameter '{name}' bound twice")
        self.params[name] = value
        return name


@dataclass(frozen=True)
class CompiledQuery:
    """Rendered SQL text with its bound parameters and result column names."""
    sql: str
    params: Mapping[str, Any]
    columns: Tuple[str, ...]
    dialect: Optional[str] = None

    def __str__(self) -> str:
        return self.sql
