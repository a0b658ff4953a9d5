"""Filter builder and its immutable specification.

A ``Filter`` is a mutable, fluent builder describing one query against the
snapshot store: which resources to select and how to order them. It does
no validation while it is being configured. ``Filter.freeze()`` takes an
immutable ``FilterSpec`` snapshot of the builder state; the spec is what the
query compiler consumes, so a filter mutated after compilation cannot affect
an already compiled statement.

Example:
    >>> from snapshot_filters.model import Filter, MeasureCriterion
    >>> from snapshot_filters.constants import Qualifier
    >>>
    >>> f = (Filter()
    ...      .set_qualifiers({Qualifier.CLASS})
    ...      .add_measure_criterion(MeasureCriterion(2, ">", 50.0))
    ...      .set_sorted_metric_id(2)
    ...      .set_ascending_sort(False))
"""

from typing import FrozenSet, Iterable, List, Optional, Set, Tuple

from pydantic import Field, model_validator

from snapshot_filters.constants.resources import ALL_QUALIFIERS, VIEW_QUALIFIERS
from snapshot_filters.constants.sql import MAX_PERIOD_INDEX, MIN_PERIOD_INDEX, SortMode
from snapshot_filters.model.criteria import DateCriterion, MeasureCriterion
from snapshot_filters.types.base import FrozenModel


def _codes(values: Optional[Iterable[str]]) -> Set[str]:
    # Enum members and raw codes are both accepted
    if not values:
        return set()
    return {getattr(v, "value", v) for v in values}


class FilterSpec(FrozenModel):
    """Immutable snapshot of a filter, consumed by the query compiler.

    Attributes mirror ``Filter``. The only cross-field rule enforced here is
    that at most one sort mode is active; two active modes are a programming
    error and fail validation instead of being resolved by precedence.
    """
    qualifiers: FrozenSet[str] = frozenset()
    scopes: FrozenSet[str] = frozenset()
    languages: FrozenSet[str] = frozenset()
    resource_ids: Optional[FrozenSet[int]] = None
    date_criterion: Optional[DateCriterion] = None

    base_snapshot_id: Optional[int] = None
    base_snapshot_depth: Optional[int] = Field(default=None, ge=0)
    base_path: Optional[str] = None

    key_regexp: Optional[str] = None
    name_regexp: Optional[str] = None

    measure_criteria: Tuple[MeasureCriterion, ...] = ()
    period_index: int = Field(default=MIN_PERIOD_INDEX, ge=MIN_PERIOD_INDEX, le=MAX_PERIOD_INDEX)

    sorted_metric_id: Optional[int] = None
    sort_on_measure_variation: bool = False
    sorted_by_name: bool = False
    sorted_by_key: bool = False
    sorted_by_date: bool = False
    sorted_by_language: bool = False
    sorted_by_version: bool = False
    ascending_sort: bool = True

    @model_validator(mode='after')
    def validate_single_sort_mode(self):
        """Ensure at most one sort mode is active."""
        modes = self.active_sort_modes()
        if len(modes) > 1:
            names = ", ".join(m.value for m in modes)
            raise ValueError(f"Conflicting sort modes: {names}. At most one sort mode can be active")
        return self

    def active_sort_modes(self) -> List[SortMode]:
        flags = [
            (self.sorted_metric_id is not None, SortMode.METRIC),
            (self.sorted_by_name, SortMode.NAME),
            (self.sorted_by_key, SortMode.KEY),
            (self.sorted_by_date, SortMode.DATE),
            (self.sorted_by_language, SortMode.LANGUAGE),
            (self.sorted_by_version, SortMode.VERSION),
        ]
        return [mode for active, mode in flags if active]

    @property
    def sort_mode(self) -> SortMode:
        modes = self.active_sort_modes()
        return modes[0] if modes else SortMode.NONE

    def must_return_empty_result(self) -> bool:
        return not self.qualifiers

    def has_measure_criteria(self) -> bool:
        return bool(self.measure_criteria)

    def has_path(self) -> bool:
        return self.base_snapshot_id is not None

    def is_on_direct_children(self) -> bool:
        return self.has_path() and not self.base_path

    def is_view_context(self) -> bool:
        """Whether project copies materialized under views must be returned.

        True when a path constraint is set and the selected qualifiers include
        a view or subview, i.e. the caller is browsing inside a view.
        """
        return self.has_path() and bool(self.qualifiers & VIEW_QUALIFIERS)

    def variation_column(self) -> str:
        return f"variation_value_{self.period_index}"


class Filter:
    """Mutable builder aggregating the selection and sorting criteria of one query.

    Every setter returns the same instance. Setters overwrite (last write
    wins), except ``add_measure_criterion`` which appends. A freshly
    constructed filter has no qualifiers and therefore matches nothing; use
    ``create_for_all_qualifiers()`` to start from every known resource type.

    Instances are not thread-safe and are meant to be built per query.
    """

    def __init__(self):
        self.qualifiers: Set[str] = set()
        self.scopes: Set[str] = set()
        self.languages: Set[str] = set()
        self.resource_ids: Optional[Set[int]] = None
        self.date_criterion: Optional[DateCriterion] = None

        self.base_snapshot_id: Optional[int] = None
        self.base_snapshot_depth: Optional[int] = None
        self.base_path: Optional[str] = None

        self.key_regexp: Optional[str] = None
        self.name_regexp: Optional[str] = None

        self.measure_criteria: List[MeasureCriterion] = []
        self.period_index: int = MIN_PERIOD_INDEX

        self.sorted_metric_id: Optional[int] = None
        self.sort_on_measure_variation = False
        self.sorted_by_name = False
        self.sorted_by_key = False
        self.sorted_by_date = False
        self.sorted_by_language = False
        self.sorted_by_version = False
        self.ascending_sort = True

    @classmethod
    def create_for_all_qualifiers(cls) -> "Filter":
        """Create a filter selecting every known resource type."""
        return cls().set_qualifiers(ALL_QUALIFIERS)

    # Selection

    def set_qualifiers(self, qualifiers: Optional[Iterable[str]]) -> "Filter":
        self.qualifiers = _codes(qualifiers)
        return self

    def set_scopes(self, scopes: Optional[Iterable[str]]) -> "Filter":
        self.scopes = _codes(scopes)
        return self

    def set_languages(self, languages: Optional[Iterable[str]]) -> "Filter":
        self.languages = set(languages or ())
        return self

    def set_resource_ids(self, resource_ids: Optional[Iterable[int]]) -> "Filter":
        """Restrict results to the given project ids (e.g. a user's favourites).

        ``None`` or an empty collection removes the restriction.
        """
        self.resource_ids = None if resource_ids is None else set(resource_ids)
        return self

    def set_date_criterion(self, date_criterion: Optional[DateCriterion]) -> "Filter":
        self.date_criterion = date_criterion
        return self

    def set_path(self, base_snapshot_id: int, base_snapshot_depth: int, base_path: str) -> "Filter":
        """Restrict results to descendants of a base snapshot.

        Args:
            base_snapshot_id: Id of the ancestor snapshot
            base_snapshot_depth: Depth of the ancestor snapshot in its tree
            base_path: Empty string for direct children only; otherwise the
                materialized path prefix every descendant's path starts with
        """
        self.base_snapshot_id = base_snapshot_id
        self.base_snapshot_depth = base_snapshot_depth
        self.base_path = base_path
        return self

    def set_key_regexp(self, key_regexp: Optional[str]) -> "Filter":
        """Set a case-insensitive glob (``*`` wildcard) on the resource key."""
        self.key_regexp = key_regexp
        return self

    def set_name_regexp(self, name_regexp: Optional[str]) -> "Filter":
        """Set a case-insensitive glob (``*`` wildcard) on the resource long name."""
        self.name_regexp = name_regexp
        return self

    def add_measure_criterion(self, criterion: MeasureCriterion) -> "Filter":
        self.measure_criteria.append(criterion)
        return self

    def set_period_index(self, period_index: int) -> "Filter":
        """Select the variation period used by variation criteria and sorts."""
        self.period_index = period_index
        return self

    # Sorting

    def set_sorted_metric_id(
        self,
        metric_id: Optional[int],
        on_variation: bool = False,
    ) -> "Filter":
        """Sort on the value (or variation) of a metric.

        Resources without a measure for the metric are kept and sorted last.

        Args:
            metric_id: Metric to sort on, None to clear
            on_variation: Sort on the variation over the filter's period
                instead of the value
        """
        self.sorted_metric_id = metric_id
        self.sort_on_measure_variation = on_variation
        return self

    def set_sorted_by_name(self, enabled: bool = True) -> "Filter":
        self.sorted_by_name = enabled
        return self

    def set_sorted_by_key(self, enabled: bool = True) -> "Filter":
        self.sorted_by_key = enabled
        return self

    def set_sorted_by_date(self, enabled: bool = True) -> "Filter":
        self.sorted_by_date = enabled
        return self

    def set_sorted_by_language(self, enabled: bool = True) -> "Filter":
        self.sorted_by_language = enabled
        return self

    def set_sorted_by_version(self, enabled: bool = True) -> "Filter":
        self.sorted_by_version = enabled
        return self

    def set_ascending_sort(self, ascending: bool) -> "Filter":
        self.ascending_sort = ascending
        return self

    # Queries

    def must_return_empty_result(self) -> bool:
        return not self.qualifiers

    def has_measure_criteria(self) -> bool:
        return bool(self.measure_criteria)

    def freeze(self) -> FilterSpec:
        """Take an immutable snapshot of the current state.

        Raises:
            ValueError: If more than one sort mode is active or a value is
                out of range (pydantic ``ValidationError``)
        """
        return FilterSpec(
            qualifiers=frozenset(self.qualifiers),
            scopes=frozenset(self.scopes),
            languages=frozenset(self.languages),
            resource_ids=None if self.resource_ids is None else frozenset(self.resource_ids),
            date_criterion=self.date_criterion,
            base_snapshot_id=self.base_snapshot_id,
            base_snapshot_depth=self.base_snapshot_depth,
            base_path=self.base_path,
            key_regexp=self.key_regexp,
            name_regexp=self.name_regexp,
            measure_criteria=tuple(self.measure_criteria),
            period_index=self.period_index,
            sorted_metric_id=self.sorted_metric_id,
            sort_on_measure_variation=self.sort_on_measure_variation,
            sorted_by_name=self.sorted_by_name,
            sorted_by_key=self.sorted_by_key,
            sorted_by_date=self.sorted_by_date,
            sorted_by_language=self.sorted_by_language,
            sorted_by_version=self.sorted_by_version,
            ascending_sort=self.ascending_sort,
        )

    def __repr__(self) -> str:
        return f"Filter({self._summary()})"

    def _summary(self) -> str:
        parts = [f"qualifiers={sorted(self.qualifiers)}"]
        if self.scopes:
            parts.append(f"scopes={sorted(self.scopes)}")
        if self.languages:
            parts.append(f"languages={sorted(self.languages)}")
        if self.base_snapshot_id is not None:
            parts.append(f"path=({self.base_snapshot_id}, {self.base_snapshot_depth}, {self.base_path!r})")
        if self.key_regexp:
            parts.append(f"key={self.key_regexp!r}")
        if self.measure_criteria:
            parts.append(f"measure_criteria={len(self.measure_criteria)}")
        return ", ".join(parts)
