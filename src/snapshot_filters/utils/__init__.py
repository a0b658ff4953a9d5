"""Utility helpers shared across snapshot-filters."""

from snapshot_filters.utils.decorators import traced

__all__ = [
    "traced",
]
