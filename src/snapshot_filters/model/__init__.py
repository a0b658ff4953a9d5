"""Filter model: the builder, its criteria and the result type.

Components:
    - Filter / FilterSpec: mutable builder and its immutable snapshot
    - DateCriterion / MeasureCriterion: immutable predicates
    - FilterResult: ordered rows with column-contract accessors
"""

from snapshot_filters.model.criteria import DateCriterion, MeasureCriterion
from snapshot_filters.model.filter import Filter, FilterSpec
from snapshot_filters.model.result import (
    BASE_COLUMNS,
    SORT_VALUE_COLUMN,
    FilterResult,
    project_id_of,
    root_project_id_of,
    snapshot_id_of,
)

__all__ = [
    "Filter",
    "FilterSpec",
    "DateCriterion",
    "MeasureCriterion",
    "FilterResult",
    "BASE_COLUMNS",
    "SORT_VALUE_COLUMN",
    "snapshot_id_of",
    "project_id_of",
    "root_project_id_of",
]
