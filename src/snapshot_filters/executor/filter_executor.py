"""Filter execution.

The executor is the entry point applications use: it freezes a filter,
compiles it for its dialect and runs the statement through a query session.
"""

from typing import Optional, Union

from snapshot_filters.dialects.base import BaseDialect
from snapshot_filters.logging import get_logger
from snapshot_filters.model.filter import Filter, FilterSpec
from snapshot_filters.model.result import FilterResult
from snapshot_filters.protocols.session import QuerySession
from snapshot_filters.query_builder.compiler import FilterQueryCompiler
from snapshot_filters.query_builder.ir import CompiledQuery
from snapshot_filters.query_builder.renderer import SqlRenderer
from snapshot_filters.utils.decorators import traced

logger = get_logger(__name__)

FilterLike = Union[Filter, FilterSpec]


def _freeze(filter_: FilterLike) -> FilterSpec:
    return filter_ if isinstance(filter_, FilterSpec) else filter_.freeze()


class FilterExecutor:
    """Compiles filters for one dialect and runs them through a session.

    Attributes:
        session: Object satisfying ``QuerySession``; only used by ``execute``
        dialect: Dialect the statements are rendered for

    Example:
        >>> executor = FilterExecutor(SQLAlchemySession(), get_dialect("mssql"))
        >>> print(executor.to_sql(Filter().add_measure_criterion(MeasureCriterion(1, ">", 400.0))))
        >>> result = executor.execute(Filter.create_for_all_qualifiers().set_sorted_by_name())
        >>> result.snapshot_ids()
    """

    def __init__(
        self,
        session: Optional[QuerySession],
        dialect: BaseDialect,
        compiler: Optional[FilterQueryCompiler] = None,
    ):
        self.session = session
        self.dialect = dialect
        self.compiler = compiler or FilterQueryCompiler()
        self.renderer = SqlRenderer(dialect)

    def compile(self, filter_: FilterLike) -> CompiledQuery:
        """Compile a filter into SQL text with its bound parameters.

        Raises:
            ValueError: If the filter is invalid (e.g. two sort modes are active)
        """
        spec = _freeze(filter_)
        return self.renderer.render(self.compiler.build_plan(spec))

    def to_sql(self, filter_: FilterLike) -> str:
        """Render the statement a filter would run, without executing it.

        A filter without qualifiers still renders, with a predicate matching
        no row.
        """
        return self.compile(filter_).sql

    @traced(
        span_name="snapshot_filters.executor.execute",
        attribute_getter=lambda self, filter_: {"db.dialect": self.dialect.name},
        result_attributes=lambda result: {"snapshot_filters.result.size": result.size()},
    )
    def execute(self, filter_: FilterLike) -> FilterResult:
        """Run a filter and return the matching rows in sort order.

        Raises:
            ValueError: If the filter is invalid
            SnapshotFilterError: If the session fails to run the statement
        """
        spec = _freeze(filter_)
        if spec.must_return_empty_result():
            logger.debug("Filter has no qualifiers, skipping query")
            return FilterResult.empty()

        if self.session is None:
            raise ValueError("FilterExecutor has no session to execute queries with")

        compiled = self.renderer.render(self.compiler.build_plan(spec))
        logger.debug(
            "Executing filter query",
            extra={"dialect": self.dialect.name, "sql": compiled.sql, "param_count": len(compiled.params)},
        )
        rows = self.session.fetch_rows(compiled.sql, compiled.params)
        logger.debug("Filter query returned rows", extra={"row_count": len(rows)})
        return FilterResult(rows, compiled.columns)
