"""Shared fixtures: an in-memory snapshot store seeded with small datasets."""

from datetime import datetime
from typing import Any, Dict, List

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from snapshot_filters import settings as settings_module
from snapshot_filters.dialects import Sqlite
from snapshot_filters.executor import FilterExecutor
from snapshot_filters.schema import metadata, project_measures, projects, snapshots
from snapshot_filters.session import SQLAlchemySession
from snapshot_filters.settings import DatabaseSettings

# Metric ids
LINES = 1
COVERAGE = 2
DUPLICATED_LINES = 3


def _project(id, kee, long_name, qualifier, scope, language=None, copy_resource_id=None) -> Dict[str, Any]:
    return {
        "id": id,
        "kee": kee,
        "name": long_name,
        "long_name": long_name,
        "qualifier": qualifier,
        "scope": scope,
        "language": language,
        "enabled": True,
        "copy_resource_id": copy_resource_id,
    }


def _snapshot(id, project_id, qualifier, scope, created_at, root_project_id=None, parent_snapshot_id=None,
              path="", depth=0, version=None, islast=True, status="P") -> Dict[str, Any]:
    return {
        "id": id,
        "project_id": project_id,
        "root_project_id": root_project_id or project_id,
        "parent_snapshot_id": parent_snapshot_id,
        "path": path,
        "depth": depth,
        "qualifier": qualifier,
        "scope": scope,
        "created_at": created_at,
        "version": version,
        "islast": islast,
        "status": status,
    }


def _measure(id, snapshot_id, metric_id, value, rule_id=None, **variations) -> Dict[str, Any]:
    row = {"id": id, "snapshot_id": snapshot_id, "metric_id": metric_id, "value": value, "rule_id": rule_id}
    for period in range(1, 6):
        row[f"variation_value_{period}"] = variations.get(f"variation_value_{period}")
    return row


SHARED_PROJECTS = [
    _project(1, "org.apache:struts", "Apache Struts", "TRK", "PRJ", "java"),
    _project(2, "org.apache:maven-plugin", "Maven Plugin Module", "BRC", "PRJ", "php"),
    _project(3, "org.apache:struts:org.sonar.core", "Apache Struts Core Package", "PAC", "DIR", "java"),
]

SHARED_SNAPSHOTS = [
    # Previous analysis of the struts project
    _snapshot(1, 1, "TRK", "PRJ", datetime(2008, 12, 20, 10, 0), version="0.9", islast=False),
    _snapshot(2, 1, "TRK", "PRJ", datetime(2008, 12, 25, 1, 0), version="1.0"),
    _snapshot(3, 2, "BRC", "PRJ", datetime(2008, 12, 27, 0, 0), version="2.0"),
    _snapshot(4, 3, "PAC", "DIR", datetime(2008, 12, 25, 2, 0), root_project_id=1,
              parent_snapshot_id=2, path="2.", depth=1, version="1.0"),
]

MEASURES_PROJECTS = SHARED_PROJECTS + [
    _project(4, "org.apache:struts:org.sonar.core.Foo", "Foo", "CLA", "FIL", "java"),
    _project(5, "org.apache:struts:org.sonar.core.Bar", "Bar", "CLA", "FIL", "java"),
]

MEASURES_SNAPSHOTS = SHARED_SNAPSHOTS + [
    _snapshot(5, 4, "CLA", "FIL", datetime(2008, 12, 25, 2, 0), root_project_id=1,
              parent_snapshot_id=4, path="2.4.", depth=2),
    _snapshot(6, 5, "CLA", "FIL", datetime(2008, 12, 25, 2, 0), root_project_id=1,
              parent_snapshot_id=4, path="2.4.", depth=2),
    # Previous analysis of Foo
    _snapshot(7, 4, "CLA", "FIL", datetime(2008, 12, 20, 10, 0), root_project_id=1,
              parent_snapshot_id=1, path="1.", depth=1, islast=False),
]

MEASURES = [
    _measure(1, 5, LINES, 510.0),
    _measure(2, 5, COVERAGE, 85.3, variation_value_1=5.0, variation_value_2=-2.0),
    # Rule-level measure, never matched by plain measure criteria
    _measure(3, 5, DUPLICATED_LINES, 99.0, rule_id=12),
    _measure(4, 6, LINES, 200.0),
    _measure(5, 6, COVERAGE, 30.0, variation_value_1=-1.0, variation_value_2=4.0),
    _measure(6, 6, DUPLICATED_LINES, 3.0),
    _measure(7, 7, COVERAGE, 10.0),
]

VIEWS_PROJECTS = [
    _project(1, "org.struts", "Struts", "TRK", "PRJ", "java"),
    _project(2, "all_projects", "All Projects", "VW", "PRJ"),
    _project(3, "all_projects:apache", "Apache Projects", "SVW", "PRJ"),
    _project(4, "all_projects:org.struts", "Struts", "TRK", "PRJ", "java", copy_resource_id=1),
    _project(5, "all_projects:apache:org.struts", "Struts", "TRK", "PRJ", "java", copy_resource_id=1),
]

VIEWS_SNAPSHOTS = [
    _snapshot(1, 1, "TRK", "PRJ", datetime(2009, 1, 1, 12, 0)),
    _snapshot(2, 2, "VW", "PRJ", datetime(2009, 1, 1, 12, 0)),
    _snapshot(3, 3, "SVW", "PRJ", datetime(2009, 1, 1, 12, 0), root_project_id=2,
              parent_snapshot_id=2, path="2.", depth=1),
    _snapshot(4, 4, "TRK", "PRJ", datetime(2009, 1, 1, 12, 0), root_project_id=2,
              parent_snapshot_id=2, path="2.", depth=1),
    _snapshot(5, 5, "TRK", "PRJ", datetime(2009, 1, 1, 12, 0), root_project_id=2,
              parent_snapshot_id=3, path="2.3.", depth=2),
]

DATASETS: Dict[str, Dict[str, List[Dict[str, Any]]]] = {
    "shared": {"projects": SHARED_PROJECTS, "snapshots": SHARED_SNAPSHOTS, "measures": []},
    "measures": {"projects": MEASURES_PROJECTS, "snapshots": MEASURES_SNAPSHOTS, "measures": MEASURES},
    "views": {"projects": VIEWS_PROJECTS, "snapshots": VIEWS_SNAPSHOTS, "measures": []},
}


def load_dataset(engine, name: str) -> None:
    dataset = DATASETS[name]
    with engine.begin() as conn:
        conn.execute(projects.insert(), dataset["projects"])
        conn.execute(snapshots.insert(), dataset["snapshots"])
        if dataset["measures"]:
            conn.execute(project_measures.insert(), dataset["measures"])


@pytest.fixture
def engine():
    engine = create_engine("sqlite://", poolclass=StaticPool, connect_args={"check_same_thread": False})
    metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def make_executor(engine):
    """Seed the store with a named dataset and return an executor on it."""

    def _make(dataset: str) -> FilterExecutor:
        load_dataset(engine, dataset)
        session = SQLAlchemySession(DatabaseSettings(url="sqlite://"), engine=engine)
        return FilterExecutor(session, Sqlite())

    return _make


@pytest.fixture(autouse=True)
def reset_settings():
    """Drop the settings singleton so environment changes never leak between tests."""
    settings_module.main._settings = None
    yield
    settings_module.main._settings = None
