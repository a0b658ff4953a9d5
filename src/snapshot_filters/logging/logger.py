"""Structured logging for snapshot-filters.

Library modules only ever call ``get_logger(__name__)`` and attach
structured fields through ``extra=``. Applications that want the JSON
output call ``setup_logging()`` once at startup; it installs a stdout
handler through ``logging.config.dictConfig`` with the JSON formatter and
the context filter, and routes the SQLAlchemy engine logger according to
the ``database.echo`` setting.
"""

from __future__ import annotations

import json
import logging
import logging.config
from datetime import datetime, timezone
from typing import Any, Dict, FrozenSet, Optional

from opentelemetry import trace

PACKAGE_LOGGER = "snapshot_filters"

# Compiled statements can be long; keep log lines bounded
MAX_SQL_FIELD_LENGTH = 4000
_SQL_FIELDS = ("sql", "db.statement")

_STANDARD_RECORD_ATTRS: FrozenSet[str] = frozenset(
    vars(logging.LogRecord("snapshot_filters", logging.INFO, __file__, 0, "", (), None))
) | {"asctime", "message"}


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def _span_ids() -> Dict[str, str]:
    context = trace.get_current_span().get_span_context()
    if not context.is_valid:
        return {}
    return {
        "trace_id": format(context.trace_id, "032x"),
        "span_id": format(context.span_id, "016x"),
    }


class CustomJsonFormatter(logging.Formatter):
    """One JSON object per record.

    Fields passed through ``extra=`` are emitted next to the standard
    ``timestamp``/``level``/``logger``/``message`` keys. The ids of the
    active OpenTelemetry span are added when there is one, so a slow filter
    query can be matched to its ``snapshot_filters.executor.execute`` span.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _STANDARD_RECORD_ATTRS
        }

        for field in _SQL_FIELDS:
            value = entry.get(field)
            if isinstance(value, str) and len(value) > MAX_SQL_FIELD_LENGTH:
                entry[field] = f"{value[:MAX_SQL_FIELD_LENGTH]}..."

        entry.update(
            timestamp=datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            level=record.levelname,
            logger=record.name,
            message=record.getMessage(),
        )
        entry.update(_span_ids())

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


def setup_logging(level: Optional[str] = None, sql_echo: Optional[bool] = None) -> None:
    """Install JSON console logging.

    Args:
        level: Base log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Defaults to the ``log_level`` setting.
        sql_echo: Log every statement sent by SQLAlchemy at INFO. Defaults to
            the ``database.echo`` setting.
    """
    if level is None or sql_echo is None:
        from snapshot_filters.settings import get_settings

        settings = get_settings()
        level = level or settings.log_level
        sql_echo = settings.database.echo if sql_echo is None else sql_echo

    level = level.upper()
    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "snapshot_filters_json": {
                "()": "snapshot_filters.logging.logger.CustomJsonFormatter",
            }
        },
        "filters": {
            "snapshot_filters_context": {
                "()": "snapshot_filters.logging.filters.ContextFilter",
            }
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "snapshot_filters_json",
                "filters": ["snapshot_filters_context"],
                "stream": "ext://sys.stdout",
            }
        },
        "loggers": {
            PACKAGE_LOGGER: {"level": level},
            "sqlalchemy.engine": {"level": "INFO" if sql_echo else "WARNING"},
        },
        "root": {
            "level": level,
            "handlers": ["console"],
        },
    })
