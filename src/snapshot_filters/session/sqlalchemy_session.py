import time
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Dict, Iterator, List, Mapping, Optional, Tuple

if TYPE_CHECKING:
    from snapshot_filters.settings import DatabaseSettings

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.pool import QueuePool, StaticPool

from snapshot_filters.common.exceptions import connection_error, query_execution_error
from snapshot_filters.logging import get_logger
from snapshot_filters.utils.decorators import traced

logger = get_logger(__name__)


class SQLAlchemySession:
    """SQLAlchemy-based query session on the snapshot store.

    Runs the statements rendered by the filter executor. Values are bound
    through ``text().bindparams()``, which types each parameter from its
    Python value, so dates and booleans reach every backend in the form
    its driver expects.

    Features:
        - Lazy engine creation from ``DatabaseSettings``
        - Connection pooling (a single shared connection for in-memory SQLite)
        - Errors wrapped in ``SnapshotFilterError`` with the failing statement
        - OpenTelemetry span per query

    Example:
        >>> session = SQLAlchemySession(get_settings().database)
        >>> rows = session.fetch_rows("SELECT id FROM snapshots WHERE islast = :islast", {"islast": True})
        >>>
        >>> # Reuse an engine owned by the application
        >>> session = SQLAlchemySession(engine=app_engine)
    """

    def __init__(self, settings: Optional['DatabaseSettings'] = None, engine: Optional[Engine] = None):
        """Initialize the session.

        Args:
            settings: Connection settings, defaults to the global settings
            engine: Existing engine to use instead of creating one
        """
        if settings is None:
            from snapshot_filters.settings import get_settings
            settings = get_settings().database
        self.settings = settings
        self._engine: Optional[Engine] = engine

    @property
    def engine(self) -> Engine:
        """Get or create the SQLAlchemy engine with lazy initialization."""
        if self._engine is None:
            self._engine = self._create_engine()
        return self._engine

    @property
    def backend_name(self) -> str:
        return self.engine.url.get_backend_name()

    def _create_engine(self) -> Engine:
        """Create the SQLAlchemy engine.

        Raises:
            SnapshotFilterError: With CONNECTION_ERROR code if engine creation fails
        """
        try:
            if self.settings.is_in_memory_sqlite:
                # Every pooled connection would otherwise see its own empty database
                engine = create_engine(
                    self.settings.url,
                    poolclass=StaticPool,
                    echo=self.settings.echo,
                    connect_args={"check_same_thread": False},
                )
            else:
                engine = create_engine(
                    self.settings.url,
                    poolclass=QueuePool,
                    pool_pre_ping=True,
                    pool_size=self.settings.pool_size,
                    max_overflow=self.settings.max_overflow,
                    pool_timeout=self.settings.pool_timeout,
                    echo=self.settings.echo,
                )

            logger.info(
                "Created database engine",
                extra={"db.system": self.settings.backend_name, "database.url": self.settings.safe_url},
            )
            return engine

        except Exception as e:
            raise connection_error(
                f"Failed to create engine for {self.settings.safe_url}",
                service=self.settings.backend_name,
                url=self.settings.safe_url,
                cause=e,
            )

    @contextmanager
    def _get_connection(self) -> Iterator[Connection]:
        conn = self.engine.connect()
        try:
            yield conn
        finally:
            conn.close()

    def _span_attributes(self, sql: str, params: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        statement = (sql or "").strip()
        if len(statement) > 4096:
            statement = f"{statement[:4093]}..."
        return {
            "db.system": self.backend_name,
            "db.operation": "select",
            "db.statement": statement,
            "db.statement.parameters": len(params or {}),
        }

    @traced(
        span_name="snapshot_filters.session.fetch_rows",
        attribute_getter=lambda self, sql, params=None: self._span_attributes(sql, params),
        result_attributes=lambda rows: {"db.response.row_count": len(rows)},
    )
    def fetch_rows(self, sql: str, params: Optional[Mapping[str, Any]] = None) -> List[Tuple[Any, ...]]:
        """Execute a query and return all rows as tuples.

        Args:
            sql: Statement with ``:name`` placeholders
            params: Placeholder values

        Returns:
            List of rows, each a tuple following the SELECT list

        Raises:
            SnapshotFilterError: With QUERY_EXECUTION_ERROR code on any database error
        """
        start_time = time.time()
        payload: Dict[str, Any] = {"db.system": self.backend_name}

        try:
            statement = text(sql)
            if params:
                statement = statement.bindparams(**params)

            with self._get_connection() as conn:
                rows = [tuple(row) for row in conn.execute(statement)]

            duration = time.time() - start_time
            logger.info(
                "Rows fetched",
                extra={**payload, "row_count": len(rows), "duration.seconds": f"{duration:.6f}"},
            )
            return rows

        except Exception as exc:
            duration = time.time() - start_time
            raise query_execution_error(
                sql, exc, details={**payload, "duration.seconds": f"{duration:.6f}"}
            )

    def test_connection(self) -> bool:
        """Test if the snapshot store answers.

        Returns:
            True if connection is successful, False otherwise
        """
        try:
            rows = self.fetch_rows("SELECT 1 AS test")
            return bool(rows) and rows[0][0] == 1
        except Exception as exc:
            logger.error(
                "Database connection test failed",
                extra={"database.url": self.settings.safe_url, "error": str(exc)},
                exc_info=True,
            )
            return False

    def dispose(self) -> None:
        """Release every pooled connection."""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
