import logging
from typing import Optional

from pydantic import Field, field_validator

from snapshot_filters.constants.sql import DialectId
from .base import SnapshotFilterBaseSettings
from .database import DatabaseSettings


_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class _Settings(SnapshotFilterBaseSettings):

    database: DatabaseSettings = Field(
        default_factory=DatabaseSettings,
        description="Snapshot store connection configuration"
    )
    dialect: Optional[DialectId] = Field(
        default=None,
        description="SQL dialect id. When unset, the dialect is detected from database.url"
    )
    log_level: str = Field(
        default="INFO",
        description="Base log level used by setup_logging()"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Invalid log level '{v}'. Expected one of {sorted(_LOG_LEVELS)}")
        return level


_settings: Optional[_Settings] = None


def get_settings(force_reload: bool = False) -> _Settings:
    """Get the singleton settings instance for the application.

    The settings are loaded from environment variables (and ``.env``) on
    first access and reused afterwards.

    Args:
        force_reload: If True, creates a new Settings instance even if
                     one already exists. Useful for testing or when
                     environment variables have changed.

    Returns:
        Settings: The singleton Settings instance

    Example:
        ```python
        settings = get_settings()
        settings2 = get_settings()
        assert settings is settings2
        ```
    """
    global _settings

    if _settings is None or force_reload:
        _settings = _Settings()
        logging.getLogger(__name__).debug(
            "Settings loaded",
            extra={"database.url": _settings.database.safe_url, "dialect": _settings.dialect},
        )

    return _settings


def _reload_settings() -> _Settings:
    """Force reload of settings.

    This is primarily for testing purposes where you need to reset
    the singleton instance.
    """
    global _settings
    _settings = None
    return get_settings(force_reload=True)
