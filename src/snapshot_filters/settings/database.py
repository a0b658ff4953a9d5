from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError
from pydantic import Field, field_validator
from pydantic_settings import SettingsConfigDict

from .base import SnapshotFilterBaseSettings


class DatabaseSettings(SnapshotFilterBaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SNAPSHOT_FILTERS_DATABASE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    url: str = Field(
        default="sqlite://",
        description="SQLAlchemy database URL of the snapshot store (e.g. mssql+pyodbc://..., postgresql://...)"
    )
    echo: bool = Field(default=False, description="Log every statement through the SQLAlchemy engine logger")

    pool_size: int = Field(default=5, ge=1, le=100)
    max_overflow: int = Field(default=10, ge=0)
    pool_timeout: int = Field(default=30, ge=1)

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Reject URLs SQLAlchemy cannot parse."""
        try:
            make_url(v)
        except ArgumentError as exc:
            raise ValueError(f"Invalid database URL: {exc}") from exc
        return v

    @property
    def backend_name(self) -> str:
        """Backend part of the URL (``mssql`` for ``mssql+pyodbc://...``)."""
        return make_url(self.url).get_backend_name()

    @property
    def is_in_memory_sqlite(self) -> bool:
        url = make_url(self.url)
        return url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:")

    @property
    def safe_url(self) -> str:
        """URL with the password masked, for logs and error details."""
        return make_url(self.url).render_as_string(hide_password=True)
