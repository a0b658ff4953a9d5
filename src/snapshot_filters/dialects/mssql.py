"""Microsoft SQL Server dialect."""

from typing import Optional

from snapshot_filters.constants.sql import DialectId
from snapshot_filters.dialects.base import BaseDialect
from snapshot_filters.schema import MEASURES_INDEX_NAME


class MsSql(BaseDialect):
    """SQL Server dialect.

    SQL Server's optimizer tends to scan ``project_measures`` when several
    measure joins are combined, so every join on that table forces the
    ``(snapshot_id, metric_id)`` index with a T-SQL table hint:

        INNER JOIN project_measures pm0 WITH (INDEX(measures_sid_metric)) ON ...
    """

    url_backends = ("mssql",)

    @property
    def id(self) -> DialectId:
        return DialectId.MSSQL

    def measure_join_hint(self) -> Optional[str]:
        return f"WITH (INDEX({MEASURES_INDEX_NAME}))"
