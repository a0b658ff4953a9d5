"""Unit tests for SQLAlchemySession."""

import logging
from datetime import datetime
from unittest.mock import patch

import pytest

from snapshot_filters.common.exceptions import ErrorCode, SnapshotFilterError
from snapshot_filters.session import SQLAlchemySession
from snapshot_filters.settings import DatabaseSettings

from conftest import load_dataset


class TestSQLAlchemySession:

    @pytest.fixture
    def session(self, engine):
        load_dataset(engine, "shared")
        return SQLAlchemySession(DatabaseSettings(), engine=engine)

    def test_fetch_rows(self, session):
        rows = session.fetch_rows(
            "SELECT id FROM snapshots WHERE islast = :islast ORDER BY id", {"islast": True}
        )
        assert rows == [(2,), (3,), (4,)]

    def test_dates_are_bound_with_time(self, session):
        rows = session.fetch_rows(
            "SELECT id FROM snapshots WHERE created_at < :created_at AND islast = :islast",
            {"created_at": datetime(2008, 12, 25, 1, 30), "islast": True},
        )
        assert rows == [(2,)]

    def test_fetch_without_params(self, session):
        assert session.fetch_rows("SELECT COUNT(*) FROM projects") == [(3,)]

    def test_query_errors_are_wrapped(self, session):
        with pytest.raises(SnapshotFilterError) as exc_info:
            session.fetch_rows("SELECT * FROM missing_table")

        assert exc_info.value.error_code == ErrorCode.QUERY_EXECUTION_ERROR
        assert exc_info.value.details["query"] == "SELECT * FROM missing_table"
        assert exc_info.value.__cause__ is not None
        assert exc_info.value.details["db.system"] == "sqlite"
        assert "duration.seconds" in exc_info.value.details

    def test_failed_fetch_is_logged_once(self, session, caplog):
        caplog.set_level(logging.ERROR, logger="snapshot_filters")

        with pytest.raises(SnapshotFilterError):
            session.fetch_rows("SELECT * FROM missing_table")

        errors = [
            r for r in caplog.records
            if r.levelno == logging.ERROR and r.name.startswith("snapshot_filters")
        ]
        assert len(errors) == 1
        assert errors[0].error_code == ErrorCode.QUERY_EXECUTION_ERROR.value

    def test_test_connection(self, session):
        assert session.test_connection() is True

    def test_lazy_engine_for_in_memory_sqlite(self):
        session = SQLAlchemySession(DatabaseSettings(url="sqlite://"))
        assert session._engine is None

        assert session.test_connection() is True
        assert session.engine.url.get_backend_name() == "sqlite"

        session.dispose()
        assert session._engine is None

    def test_engine_creation_failure(self):
        session = SQLAlchemySession(DatabaseSettings(url="sqlite://"))

        with patch("snapshot_filters.session.sqlalchemy_session.create_engine", side_effect=RuntimeError("no driver")):
            with pytest.raises(SnapshotFilterError) as exc_info:
                session.engine

        assert exc_info.value.error_code == ErrorCode.CONNECTION_ERROR
        assert exc_info.value.details["service"] == "sqlite"
