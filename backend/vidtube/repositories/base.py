"""Generic repository base for SQLAlchemy 2.x.

Repositories are persistence-only: they stage and query rows and flush so
primary keys materialize, but never commit or roll back. Units of work own
the transaction; services own the use cases.

Aggregated read models (counts, "liked by the caller" flags) live as
dedicated query methods on the concrete repositories.
"""

from __future__ import annotations

from typing import Any, ClassVar, Generic, TypeVar, cast

from sqlalchemy import select
from sqlalchemy.orm import Session

from vidtube.core.extensions import db

E = TypeVar("E")  # SQLAlchemy mapped entity type


class BaseRepository(Generic[E]):
    """Shared CRUD helpers for a single mapped class.

    Subclasses set ``model`` and, when rows may be edited through
    :meth:`update`, the ``updatable`` column whitelist.
    """

    model: type[E]
    #: Attributes :meth:`update` may assign; anything else is rejected.
    updatable: ClassVar[frozenset[str]] = frozenset()

    def __init__(self, session: Session | None = None) -> None:
        """
        :param session: Session shared across the Unit of Work scope; the
            Flask-scoped session when omitted.
        :type session: :class:`sqlalchemy.orm.Session` | None
        """
        self._session: Session | None = session

    @property
    def session(self) -> Session:
        if self._session is not None:
            return self._session
        return cast(Session, db.session)

    # --------------------------------- CRUD ----------------------------------

    def add(self, instance: E) -> E:
        """Stage ``instance`` and flush so its primary key is assigned."""
        self.session.add(instance)
        self.flush()
        return instance

    def get(self, entity_id: Any) -> E | None:
        return self.session.get(self.model, entity_id)

    def exists(self, **filters: Any) -> bool:
        """Return ``True`` when a row matches every ``column=value`` pair."""
        stmt = select(select(self.model).filter_by(**filters).exists())
        return bool(self.session.scalar(stmt))

    def delete(self, instance: E) -> None:
        self.session.delete(instance)
        self.flush()

    def flush(self) -> None:
        self.session.flush()

    def update(self, instance: E, **fields: Any) -> E:
        """
        Assign whitelisted attributes and flush.

        ``setattr`` is used so ``@validates`` hooks on the model still run.

        :raises ValueError: A key is not in :attr:`updatable`.
        """
        rejected = sorted(set(fields) - self.updatable)
        if rejected:
            raise ValueError(f"Non-updatable fields for {self.model.__name__}: {rejected}")
        for name, value in fields.items():
            setattr(instance, name, value)
        self.flush()
        return instance
