"""Compilation of a filter specification into a query plan.

Statement layout:

    SELECT s.id, s.project_id, s.root_project_id [, <sort expression>]
    FROM snapshots s
    INNER JOIN projects p ON s.project_id = p.id [AND p.copy_resource_id IS NULL]
    [INNER JOIN project_measures pm<i> ON ...]       one per measure criterion
    [LEFT OUTER JOIN project_measures pms ON ...]    sort on a metric
    WHERE s.status = 'P' AND s.islast = true [AND ...]
    ORDER BY ...

Every measure criterion gets its own join, so criteria compose as an
intersection even when several of them target the same metric
(``lines > 400`` and ``lines < 600`` select the open range). A resource
without the measure has no matching row and is dropped by the inner join.
The sort join is a left outer join: resources without the sorted measure
stay in the result and are ordered after all the others.
"""

from typing import Iterable, List, Optional

from snapshot_filters.constants.resources import SnapshotStatus
from snapshot_filters.constants.sql import SortMode
from snapshot_filters.logging import get_logger
from snapshot_filters.model.criteria import MeasureCriterion
from snapshot_filters.model.filter import FilterSpec
from snapshot_filters.model.result import (
    PROJECT_ID_COLUMN,
    ROOT_PROJECT_ID_COLUMN,
    SNAPSHOT_ID_COLUMN,
    SORT_VALUE_COLUMN,
)
from snapshot_filters.query_builder.ir import (
    AlwaysFalse,
    ColumnEquals,
    Comparison,
    Condition,
    GlobMatch,
    InList,
    IsNull,
    JoinKind,
    OrderTerm,
    PrefixMatch,
    QueryPlan,
    SelectColumn,
    TableJoin,
)

logger = get_logger(__name__)

SNAPSHOT_ALIAS = "s"
PROJECT_ALIAS = "p"
SORT_MEASURE_ALIAS = "pms"

# Columns sorted on for the non-metric sort modes
_SORT_COLUMNS = {
    SortMode.NAME: f"{PROJECT_ALIAS}.long_name",
    SortMode.KEY: f"{PROJECT_ALIAS}.kee",
    SortMode.DATE: f"{SNAPSHOT_ALIAS}.created_at",
    SortMode.LANGUAGE: f"{PROJECT_ALIAS}.language",
    SortMode.VERSION: f"{SNAPSHOT_ALIAS}.version",
}


def _criterion_alias(index: int) -> str:
    return f"pm{index}"


class FilterQueryCompiler:
    """Builds the ``QueryPlan`` of a filter.

    The compiler decides the structure of the statement (which joins exist,
    which predicates apply, how rows are ordered). It knows nothing about
    dialects; the ``SqlRenderer`` turns the plan into text.
    """

    def build_plan(self, spec: FilterSpec) -> QueryPlan:
        """Build the query plan for ``spec``.

        A spec without qualifiers still produces a complete plan; its
        qualifier restriction is the always-false predicate.
        """
        plan = QueryPlan(from_table="snapshots", from_alias=SNAPSHOT_ALIAS)
        plan.columns.extend([
            SelectColumn(f"{SNAPSHOT_ALIAS}.id", SNAPSHOT_ID_COLUMN),
            SelectColumn(f"{SNAPSHOT_ALIAS}.project_id", PROJECT_ID_COLUMN),
            SelectColumn(f"{SNAPSHOT_ALIAS}.root_project_id", ROOT_PROJECT_ID_COLUMN),
        ])

        plan.joins.append(self._project_join(spec))
        for index, criterion in enumerate(spec.measure_criteria):
            plan.joins.append(self._criterion_join(plan, spec, index, criterion))

        self._add_predicates(plan, spec)
        self._add_sort(plan, spec)

        logger.debug(
            "Query plan built",
            extra={
                "joins": len(plan.joins),
                "measure_joins": len(plan.measure_joins()),
                "predicates": len(plan.predicates),
                "sort_mode": spec.sort_mode.value,
            },
        )
        return plan

    def _project_join(self, spec: FilterSpec) -> TableJoin:
        conditions: List[Condition] = [
            ColumnEquals(f"{SNAPSHOT_ALIAS}.project_id", f"{PROJECT_ALIAS}.id"),
        ]
        # Project copies only show up when browsing inside a view
        if not spec.is_view_context():
            conditions.append(IsNull(f"{PROJECT_ALIAS}.copy_resource_id"))
        return TableJoin(JoinKind.INNER, "projects", PROJECT_ALIAS, tuple(conditions))

    def _measure_conditions(
        self,
        plan: QueryPlan,
        alias: str,
        metric_id: int,
        metric_param: str,
    ) -> List[Condition]:
        return [
            ColumnEquals(f"{alias}.snapshot_id", f"{SNAPSHOT_ALIAS}.id"),
            Comparison(f"{alias}.metric_id", "=", plan.bind(metric_param, metric_id)),
            IsNull(f"{alias}.rule_id"),
            IsNull(f"{alias}.characteristic_id"),
            IsNull(f"{alias}.person_id"),
        ]

    def _criterion_join(
        self,
        plan: QueryPlan,
        spec: FilterSpec,
        index: int,
        criterion: MeasureCriterion,
    ) -> TableJoin:
        alias = _criterion_alias(index)
        column = spec.variation_column() if criterion.variation else "value"
        conditions = self._measure_conditions(plan, alias, criterion.metric_id, f"crit_{index}_metric")
        conditions.insert(
            2,
            Comparison(
                f"{alias}.{column}",
                criterion.operator,
                plan.bind(f"crit_{index}_value", criterion.value),
            ),
        )
        return TableJoin(JoinKind.INNER, "project_measures", alias, tuple(conditions), measures_join=True)

    def _add_predicates(self, plan: QueryPlan, spec: FilterSpec) -> None:
        s, p = SNAPSHOT_ALIAS, PROJECT_ALIAS
        predicates = plan.predicates

        predicates.append(Comparison(f"{s}.status", "=", plan.bind("status", SnapshotStatus.PROCESSED.value)))
        predicates.append(Comparison(f"{s}.islast", "=", plan.bind("islast", True)))

        if spec.must_return_empty_result():
            predicates.append(AlwaysFalse())
        else:
            predicates.append(self._in_list(plan, f"{s}.qualifier", "qualifier", spec.qualifiers))

        if spec.scopes:
            predicates.append(self._in_list(plan, f"{s}.scope", "scope", spec.scopes))
        if spec.languages:
            predicates.append(self._in_list(plan, f"{p}.language", "language", spec.languages))
        if spec.resource_ids:
            predicates.append(self._in_list(plan, f"{s}.project_id", "resource_id", spec.resource_ids))

        if spec.date_criterion is not None:
            predicates.append(
                Comparison(
                    f"{s}.created_at",
                    spec.date_criterion.operator,
                    plan.bind("created_at", spec.date_criterion.date),
                )
            )

        if spec.has_path():
            if spec.is_on_direct_children():
                predicates.append(
                    Comparison(f"{s}.parent_snapshot_id", "=", plan.bind("base_snapshot_id", spec.base_snapshot_id))
                )
            else:
                predicates.append(PrefixMatch(f"{s}.path", "base_path", spec.base_path))
                predicates.append(
                    Comparison(f"{s}.depth", ">", plan.bind("base_snapshot_depth", spec.base_snapshot_depth or 0))
                )

        if spec.key_regexp:
            predicates.append(GlobMatch(f"{p}.kee", "key_pattern", spec.key_regexp))
        if spec.name_regexp:
            predicates.append(GlobMatch(f"{p}.long_name", "name_pattern", spec.name_regexp))

    def _in_list(self, plan: QueryPlan, column: str, prefix: str, values: Iterable) -> InList:
        # Sorted so the same filter always renders the same statement
        params = tuple(
            plan.bind(f"{prefix}_{index}", value)
            for index, value in enumerate(sorted(values))
        )
        return InList(column, params)

    def _add_sort(self, plan: QueryPlan, spec: FilterSpec) -> None:
        mode = spec.sort_mode
        ascending = spec.ascending_sort
        expression: Optional[str] = None

        if mode == SortMode.METRIC:
            column = spec.variation_column() if spec.sort_on_measure_variation else "value"
            conditions = self._measure_conditions(plan, SORT_MEASURE_ALIAS, spec.sorted_metric_id, "sort_metric_id")
            plan.joins.append(
                TableJoin(
                    JoinKind.LEFT_OUTER,
                    "project_measures",
                    SORT_MEASURE_ALIAS,
                    tuple(conditions),
                    measures_join=True,
                )
            )
            expression = f"{SORT_MEASURE_ALIAS}.{column}"
            plan.order_by.append(OrderTerm(expression, ascending, nulls_last=True))
        elif mode != SortMode.NONE:
            expression = _SORT_COLUMNS[mode]
            plan.order_by.append(OrderTerm(expression, ascending))

        if expression is not None:
            plan.columns.append(SelectColumn(expression, SORT_VALUE_COLUMN))

        # Tie-breaker follows the direction so descending is the exact reverse of ascending
        plan.order_by.append(OrderTerm(f"{SNAPSHOT_ALIAS}.id", ascending if expression else True))
