from snapshot_filters.types.base import FrozenModel, SnapshotFilterBaseModel

__all__ = [
    "SnapshotFilterBaseModel",
    "FrozenModel",
]
