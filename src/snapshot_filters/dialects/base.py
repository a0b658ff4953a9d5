from abc import ABC, abstractmethod
from typing import Optional, Tuple

from snapshot_filters.constants.sql import DialectId


class BaseDialect(ABC):
    """Base interface for SQL dialect strategies.

    A dialect is a small capability object injected into the query renderer.
    It does not generate statements itself; it answers the handful of
    questions on which the supported databases disagree:

        - an optional table hint rendered right after every
          ``project_measures`` table reference
        - the multi-character LIKE wildcard and how LIKE metacharacters
          in caller text are escaped
        - the case-folding function used for case-insensitive matching

    Dialects are stateless and can be shared across threads.
    """

    # SQLAlchemy backend names (``make_url(url).get_backend_name()``) served by this dialect
    url_backends: Tuple[str, ...] = ()

    @property
    @abstractmethod
    def id(self) -> DialectId:
        """Identifier of the dialect."""
        pass

    @property
    def name(self) -> str:
        return self.id.value

    def measure_join_hint(self) -> Optional[str]:
        """Table hint for joins on ``project_measures``, None when the dialect has none."""
        return None

    @property
    def like_wildcard(self) -> str:
        return "%"

    def upper(self, expression: str) -> str:
        return f"UPPER({expression})"

    @property
    def like_escape(self) -> str:
        return "\\"

    def like_escape_clause(self) -> str:
        """ESCAPE clause written after every LIKE that matches caller text."""
        return f"ESCAPE '{self.like_escape}'"

    def escape_like(self, text: str) -> str:
        """Escape the LIKE metacharacters of ``text`` so it matches literally."""
        for char in (self.like_escape, "%", "_"):
            text = text.replace(char, self.like_escape + char)
        return text

    def to_like_pattern(self, glob: str) -> str:
        """Translate a ``*`` glob into an upper-cased LIKE pattern.

        ``*`` is the only wildcard; ``%`` and ``_`` in the glob match themselves.
        """
        return self.escape_like(glob).upper().replace("*", self.like_wildcard)

    def matches_backend(self, backend_name: str) -> bool:
        return backend_name.lower() in self.url_backends

    def __eq__(self, other: object) -> bool:
        return isinstance(other, BaseDialect) and other.id == self.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
