"""Resource-related constants.

Qualifiers and scopes are the short codes stored in the ``qualifier`` and
``scope`` columns of the snapshot store. They are plain ``str`` enums so they
can be compared directly against raw column values.
"""

from enum import Enum
from typing import FrozenSet


class Qualifier(str, Enum):
    """Resource type codes.

    Values:
        VIEW: Portfolio-level aggregation of projects
        SUBVIEW: Nested aggregation inside a view
        LIBRARY: External library
        PROJECT: Root project
        MODULE: Module of a multi-module project
        DIRECTORY: Source directory
        PACKAGE: Java package
        FILE: Source file
        CLASS: Java class
        UNIT_TEST_CLASS: Unit test class
    """

    VIEW = "VW"
    SUBVIEW = "SVW"
    LIBRARY = "LIB"
    PROJECT = "TRK"
    MODULE = "BRC"
    DIRECTORY = "DIR"
    PACKAGE = "PAC"
    FILE = "FIL"
    CLASS = "CLA"
    UNIT_TEST_CLASS = "UTS"


class Scope(str, Enum):
    """Coarse resource grouping above qualifiers."""

    PROJECT = "PRJ"
    SPACE = "DIR"
    ENTITY = "FIL"


class SnapshotStatus(str, Enum):
    """Processing status of a snapshot."""

    PROCESSED = "P"
    UNPROCESSED = "U"


ALL_QUALIFIERS: FrozenSet[str] = frozenset(q.value for q in Qualifier)

# Qualifiers under which project copies can be materialized
VIEW_QUALIFIERS: FrozenSet[str] = frozenset({Qualifier.VIEW.value, Qualifier.SUBVIEW.value})
