"""Settings module for snapshot-filters, built on Pydantic Settings.

Configuration Sources (precedence order):
    1. Environment Variables (highest priority)
    2. ``.env`` file in the working directory
    3. Default Values in code (lowest priority)

Environment Variable Naming:
    - Prefix: SNAPSHOT_FILTERS_
    - Nested: Use double underscore __ (e.g., SNAPSHOT_FILTERS_DATABASE__URL)
      or the domain prefix directly (e.g., SNAPSHOT_FILTERS_DATABASE_URL)

Quick Start:
    >>> from snapshot_filters.settings import get_settings
    >>> settings = get_settings()
    >>> settings.database.url
    'sqlite://'
"""

from .main import _Settings, get_settings, _reload_settings
from .base import SnapshotFilterBaseSettings
from .database import DatabaseSettings

__all__ = [
    "get_settings",
    "DatabaseSettings",
    "SnapshotFilterBaseSettings",
]
