"""Filter results and the row column contract.

Every statement produced by the query compiler selects the same leading
columns, in this order:

    0. ``snapshot_id``       id of the matching snapshot
    1. ``project_id``        id of the resource the snapshot belongs to
    2. ``root_project_id``   id of the root project of that resource
    3. ``sort_value``        only when a sort mode is active

Rows are opaque sequences (SQLAlchemy ``Row`` objects or plain tuples); the
accessors below map them to fields by position so that results do not
depend on driver-specific column naming.
"""

from typing import TYPE_CHECKING, Any, List, Optional, Sequence

if TYPE_CHECKING:
    import pandas as pd

SNAPSHOT_ID_COLUMN = "snapshot_id"
PROJECT_ID_COLUMN = "project_id"
ROOT_PROJECT_ID_COLUMN = "root_project_id"
SORT_VALUE_COLUMN = "sort_value"

BASE_COLUMNS = (SNAPSHOT_ID_COLUMN, PROJECT_ID_COLUMN, ROOT_PROJECT_ID_COLUMN)

SNAPSHOT_ID_INDEX = 0
PROJECT_ID_INDEX = 1
ROOT_PROJECT_ID_INDEX = 2
SORT_VALUE_INDEX = 3

Row = Sequence[Any]


def snapshot_id_of(row: Row) -> int:
    return int(row[SNAPSHOT_ID_INDEX])


def project_id_of(row: Row) -> int:
    return int(row[PROJECT_ID_INDEX])


def root_project_id_of(row: Row) -> Optional[int]:
    value = row[ROOT_PROJECT_ID_INDEX]
    return None if value is None else int(value)


class FilterResult:
    """Read-only, ordered view over the rows returned for one filter.

    Rows keep the order the database returned them in, which is the compiled
    ``ORDER BY`` of the filter.
    """

    def __init__(self, rows: Sequence[Row], columns: Sequence[str] = BASE_COLUMNS):
        self._rows: List[Row] = list(rows)
        self._columns = tuple(columns)

    @classmethod
    def empty(cls) -> "FilterResult":
        return cls([])

    @property
    def columns(self) -> tuple:
        return self._columns

    def size(self) -> int:
        return len(self._rows)

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self):
        return iter(self._rows)

    def get_rows(self) -> List[Row]:
        # Copy so callers cannot reorder the result
        return list(self._rows)

    def get_snapshot_id(self, row: Row) -> int:
        return snapshot_id_of(row)

    def get_project_id(self, row: Row) -> int:
        return project_id_of(row)

    def get_root_project_id(self, row: Row) -> Optional[int]:
        return root_project_id_of(row)

    def get_sort_value(self, row: Row) -> Any:
        """Value the rows were sorted on, None when the filter is unsorted."""
        if SORT_VALUE_COLUMN not in self._columns:
            return None
        return row[SORT_VALUE_INDEX]

    def snapshot_ids(self) -> List[int]:
        """Snapshot ids in result order."""
        return [snapshot_id_of(row) for row in self._rows]

    def to_dataframe(self) -> "pd.DataFrame":
        """Materialize the rows as a pandas DataFrame named after the column contract."""
        import pandas as pd

        return pd.DataFrame.from_records(
            [tuple(row) for row in self._rows], columns=list(self._columns)
        )

    def __repr__(self) -> str:
        return f"FilterResult(size={self.size()}, columns={list(self._columns)})"
