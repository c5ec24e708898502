"""Unit of Work abstractions and their SQLAlchemy implementations.

Services depend on :class:`UnitOfWork`; the Flask-bound implementations share
the scoped session with every repository they expose.
"""

from .base import SupportsCommit, UnitOfWork
from .sqlalchemy_uow import SQLAlchemyReadOnlyUnitOfWork, SQLAlchemyUnitOfWork

__all__ = [
    "SupportsCommit",
    "UnitOfWork",
    "SQLAlchemyUnitOfWork",
    "SQLAlchemyReadOnlyUnitOfWork",
]
