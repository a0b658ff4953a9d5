from pydantic_settings import BaseSettings, SettingsConfigDict


class SnapshotFilterBaseSettings(BaseSettings):
    """Base class for all snapshot-filters settings.

    Every settings class reads ``SNAPSHOT_FILTERS_``-prefixed environment
    variables and an optional ``.env`` file. Subclasses narrow the prefix
    for their own domain (e.g. ``SNAPSHOT_FILTERS_DATABASE_``).
    """

    model_config = SettingsConfigDict(
        env_prefix="SNAPSHOT_FILTERS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_nested_delimiter="__"
    )
