"""Protocol definitions for snapshot-filters.

Protocols define the contracts between the filter executor and the
components it depends on. They have no dependencies on the rest of the
package and rely on structural subtyping, so any object with the right
methods satisfies them without inheriting from anything.
"""

from .session import QuerySession

__all__ = [
    "QuerySession",
]
