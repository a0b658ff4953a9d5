"""Criterion value objects.

Criteria are immutable predicates attached to a filter. Their operator is
restricted to ``ComparisonOperator`` so that the token rendered into SQL is
always one of a known set; the comparand itself is always bound as a
parameter.
"""

from datetime import datetime

from pydantic import Field

from snapshot_filters.constants.sql import ComparisonOperator
from snapshot_filters.types.base import FrozenModel


class DateCriterion(FrozenModel):
    """Comparison of the snapshot creation instant against a timestamp.

    The comparison keeps full date and time precision: ``< 2008-12-25 03:00``
    excludes a snapshot created at ``2008-12-25 05:00``.

    Attributes:
        operator: Comparison operator (``>``, ``<``, ``>=``, ``<=``, ``=``)
        date: Timestamp to compare ``snapshots.created_at`` against
    """
    operator: ComparisonOperator
    date: datetime

    def __init__(self, operator: str, date: datetime, **kwargs):
        super().__init__(operator=operator, date=date, **kwargs)

    @classmethod
    def parse(cls, operator: str, value: str, fmt: str = "%Y-%m-%d %H:%M") -> "DateCriterion":
        """Build a criterion from a formatted date string.

        Args:
            operator: Comparison operator
            value: Date string, e.g. ``"2008-12-26 00:00"``
            fmt: ``strptime`` format of ``value``
        """
        return cls(operator, datetime.strptime(value, fmt))


class MeasureCriterion(FrozenModel):
    """Numeric comparison against a resource's latest measure of a metric.

    A resource with no plain measure for ``metric_id`` never satisfies the
    criterion, whatever the operator.

    Attributes:
        metric_id: Identifier of the metric
        operator: Comparison operator (``>``, ``<``, ``>=``, ``<=``, ``=``)
        value: Comparand
        variation: Compare the variation over the filter's period instead of
            the absolute value
    """
    metric_id: int = Field(..., ge=1)
    operator: ComparisonOperator
    value: float
    variation: bool = False

    def __init__(self, metric_id: int, operator: str, value: float, variation: bool = False, **kwargs):
        super().__init__(metric_id=metric_id, operator=operator, value=value, variation=variation, **kwargs)
