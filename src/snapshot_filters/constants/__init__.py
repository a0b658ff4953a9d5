"""Constants module for snapshot-filters.

This module contains all constant values and enumerations used throughout
the package. As Layer 0 in the architecture, this module has no
dependencies on other snapshot_filters modules.

Organization:
    - resources: Qualifier, scope and snapshot status codes
    - sql: Comparison operators, sort modes and dialect ids
"""

from snapshot_filters.constants.resources import (
    ALL_QUALIFIERS,
    VIEW_QUALIFIERS,
    Qualifier,
    Scope,
    SnapshotStatus,
)
from snapshot_filters.constants.sql import (
    MAX_PERIOD_INDEX,
    MIN_PERIOD_INDEX,
    ComparisonOperator,
    DialectId,
    SortMode,
)

__all__ = [
    # Resources
    "Qualifier",
    "Scope",
    "SnapshotStatus",
    "ALL_QUALIFIERS",
    "VIEW_QUALIFIERS",
    # SQL
    "ComparisonOperator",
    "SortMode",
    "DialectId",
    "MIN_PERIOD_INDEX",
    "MAX_PERIOD_INDEX",
]
