"""Query session protocol.

The executor renders SQL and hands it to a session; the session owns the
connection to the snapshot store.
"""

from typing import Any, Mapping, Protocol, Sequence, runtime_checkable


@runtime_checkable
class QuerySession(Protocol):
    """Protocol for objects able to run a read-only parameterized query.

    The protocol is marked as runtime_checkable to allow isinstance()
    checks at runtime, which is useful for validation and testing.
    """

    def fetch_rows(self, sql: str, params: Mapping[str, Any]) -> Sequence[Sequence[Any]]:
        """Run ``sql`` with named bound parameters and return every row.

        Args:
            sql: Statement using ``:name`` placeholders
            params: Values for the placeholders

        Returns:
            Rows in the order the database produced them, each row being a
            positional sequence matching the SELECT list

        Raises:
            SnapshotFilterError: If the statement cannot be executed
        """
        ...
