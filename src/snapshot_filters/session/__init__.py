"""Database sessions running compiled filter queries."""

from .sqlalchemy_session import SQLAlchemySession

__all__ = [
    "SQLAlchemySession",
]
