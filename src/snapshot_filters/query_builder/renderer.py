"""Rendering of query plans into dialect-specific SQL text."""

from typing import Any, Dict, List

from snapshot_filters.dialects.base import BaseDialect
from snapshot_filters.query_builder.ir import (
    AlwaysFalse,
    ColumnEquals,
    Comparison,
    CompiledQuery,
    Condition,
    GlobMatch,
    InList,
    IsNull,
    OrderTerm,
    PrefixMatch,
    QueryPlan,
    TableJoin,
)


class SqlRenderer:
    """Turns a ``QueryPlan`` into SQL text for one dialect.

    The dialect influences the hint written right after each
    ``project_measures`` table reference, the LIKE wildcard and escape
    clause, and the case-folding function. A dialect without a hint renders
    the statement without any trace of one.
    """

    def __init__(self, dialect: BaseDialect):
        self.dialect = dialect

    def render(self, plan: QueryPlan) -> CompiledQuery:
        params: Dict[str, Any] = dict(plan.params)

        select_list = ", ".join(f"{c.expression} AS {c.alias}" for c in plan.columns)
        lines: List[str] = [
            f"SELECT {select_list}",
            f"FROM {plan.from_table} {plan.from_alias}",
        ]
        lines.extend(self._render_join(join, params) for join in plan.joins)

        if plan.predicates:
            where = " AND ".join(self._render_condition(c, params) for c in plan.predicates)
            lines.append(f"WHERE {where}")

        if plan.order_by:
            order_terms: List[str] = []
            for term in plan.order_by:
                order_terms.extend(self._render_order_term(term))
            lines.append(f"ORDER BY {', '.join(order_terms)}")

        return CompiledQuery(
            sql="\n".join(lines),
            params=params,
            columns=plan.column_names,
            dialect=self.dialect.name,
        )

    def _render_join(self, join: TableJoin, params: Dict[str, Any]) -> str:
        table_ref = f"{join.table} {join.alias}"
        hint = self.dialect.measure_join_hint() if join.measures_join else None
        if hint:
            table_ref = f"{table_ref} {hint}"
        on = " AND ".join(self._render_condition(c, params) for c in join.conditions)
        return f"{join.kind.value} {table_ref} ON {on}"

    def _render_condition(self, condition: Condition, params: Dict[str, Any]) -> str:
        if isinstance(condition, ColumnEquals):
            return f"{condition.left} = {condition.right}"
        if isinstance(condition, Comparison):
            return f"{condition.column} {condition.operator} :{condition.param}"
        if isinstance(condition, InList):
            placeholders = ", ".join(f":{p}" for p in condition.params)
            return f"{condition.column} IN ({placeholders})"
        if isinstance(condition, IsNull):
            return f"{condition.column} IS {'NOT ' if condition.negated else ''}NULL"
        if isinstance(condition, GlobMatch):
            params[condition.param] = self.dialect.to_like_pattern(condition.glob)
            return f"{self.dialect.upper(condition.column)} {self._like(condition.param)}"
        if isinstance(condition, PrefixMatch):
            params[condition.param] = self.dialect.escape_like(condition.prefix) + self.dialect.like_wildcard
            return f"{condition.column} {self._like(condition.param)}"
        if isinstance(condition, AlwaysFalse):
            return "1 = 0"
        raise NotImplementedError(
            f"Condition type {type(condition).__name__} not supported by {self.__class__.__name__}"
        )

    def _like(self, param: str) -> str:
        return f"LIKE :{param} {self.dialect.like_escape_clause()}"

    def _render_order_term(self, term: OrderTerm) -> List[str]:
        direction = "ASC" if term.ascending else "DESC"
        rendered: List[str] = []
        if term.nulls_last:
            rendered.append(f"CASE WHEN {term.expression} IS NULL THEN 1 ELSE 0 END ASC")
        rendered.append(f"{term.expression} {direction}")
        return rendered
