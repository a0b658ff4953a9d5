"""Query builder module for filter SQL generation.

Query builders translate a filter into SQL but do NOT execute it; that is
the job of the executor and its session.

Architecture:
    - ir.py: Typed nodes (joins, conditions, order terms) forming a QueryPlan
    - compiler.py: FilterSpec -> QueryPlan (join strategy, predicates, ordering)
    - renderer.py: QueryPlan + dialect -> CompiledQuery (SQL text and parameters)

Design Principles:
    1. **SQL Generation Only**: Builders only generate SQL strings
    2. **Dialect-Aware Rendering**: Structure is decided once, text per dialect
    3. **Bound Parameters**: Caller values never get concatenated into SQL
    4. **Stateless**: Builders don't maintain state between calls

Example:
    >>> from snapshot_filters.query_builder import FilterQueryCompiler, SqlRenderer
    >>> from snapshot_filters.dialects import MsSql
    >>> plan = FilterQueryCompiler().build_plan(a_filter.freeze())
    >>> compiled = SqlRenderer(MsSql()).render(plan)
    >>> compiled.sql, compiled.params
"""

from snapshot_filters.query_builder.compiler import FilterQueryCompiler
from snapshot_filters.query_builder.ir import CompiledQuery, QueryPlan
from snapshot_filters.query_builder.renderer import SqlRenderer

__all__ = [
    "FilterQueryCompiler",
    "SqlRenderer",
    "QueryPlan",
    "CompiledQuery",
]
