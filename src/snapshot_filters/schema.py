"""SQLAlchemy Core description of the snapshot store.

The filter engine only reads these tables. The metadata is used to create
the store in tests and embedded deployments, and documents the columns the
compiled SQL relies on.
"""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
)

metadata = MetaData()

projects = Table(
    "projects",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("kee", String(400), nullable=False),
    Column("name", String(256)),
    Column("long_name", String(256)),
    Column("language", String(20)),
    Column("scope", String(3)),
    Column("qualifier", String(10)),
    Column("enabled", Boolean, nullable=False, default=True),
    Column("root_id", Integer),
    # Set on project copies materialized under a view
    Column("copy_resource_id", Integer),
)

snapshots = Table(
    "snapshots",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("project_id", Integer, ForeignKey("projects.id"), nullable=False),
    Column("root_project_id", Integer),
    Column("parent_snapshot_id", Integer),
    Column("root_snapshot_id", Integer),
    Column("path", String(500)),
    Column("depth", Integer),
    Column("scope", String(3)),
    Column("qualifier", String(10)),
    Column("created_at", DateTime),
    Column("version", String(60)),
    Column("status", String(4), nullable=False, default="U"),
    Column("islast", Boolean, nullable=False, default=False),
)

project_measures = Table(
    "project_measures",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("snapshot_id", Integer, ForeignKey("snapshots.id")),
    Column("metric_id", Integer, nullable=False),
    Column("value", Float),
    Column("variation_value_1", Float),
    Column("variation_value_2", Float),
    Column("variation_value_3", Float),
    Column("variation_value_4", Float),
    Column("variation_value_5", Float),
    Column("rule_id", Integer),
    Column("characteristic_id", Integer),
    Column("person_id", Integer),
    Index("measures_sid_metric", "snapshot_id", "metric_id"),
)

# Name of the index the MsSql dialect forces on measure joins
MEASURES_INDEX_NAME = "measures_sid_metric"
