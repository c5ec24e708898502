# vidtube/services/_shared/base.py
from __future__ import annotations

from dataclasses import dataclass

from vidtube.services._shared.errors import ForbiddenError, ValidationError
from vidtube.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyUnitOfWork,
)

#: Minimum password length accepted at registration and on password change.
PASSWORD_MIN_LENGTH = 3


@dataclass(slots=True)
class ServiceContext:
    """
    Carry request-scoped data (caller identity, correlation id).

    :param actor_id: Authenticated account identifier.
    :param request_id: Correlation id for logging/tracing.
    """

    actor_id: int | None = None
    request_id: str | None = None


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Provide helpers to run read-only and read-write units of work.
    * Offer shared validation and ownership helpers.
    * Keep services thin, orchestration-only, no web/ORM leakage.

    Notes
    -----
    - Services never touch the global session; they always open a Unit of Work.
    - Services return DTOs, never ORM instances.
    """

    DEFAULT_READ_ISOLATION = "READ COMMITTED"

    def __init__(self, *, ctx: ServiceContext | None = None) -> None:
        """
        Initialize the base service.

        :param ctx: Optional request-scoped context.
        :type ctx: ServiceContext | None
        """
        self.ctx = ctx or ServiceContext()

    # -------------------------- UoW helpers ---------------------------------

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        """
        Create a read-write Unit of Work.

        :returns: Read-write UoW instance.
        :rtype: SQLAlchemyUnitOfWork
        """
        return SQLAlchemyUnitOfWork()

    def ro_uow(
        self, *, isolation: str | None = None, enforce_db_readonly: bool = True
    ) -> SQLAlchemyReadOnlyUnitOfWork:
        """
        Create a read-only Unit of Work.

        :param isolation: Transaction isolation level (e.g. "READ COMMITTED").
        :type isolation: str | None
        :param enforce_db_readonly: Apply `SET TRANSACTION READ ONLY` when supported.
        :type enforce_db_readonly: bool
        :returns: Read-only UoW instance.
        :rtype: SQLAlchemyReadOnlyUnitOfWork
        """
        return SQLAlchemyReadOnlyUnitOfWork(
            isolation_level=isolation or self.DEFAULT_READ_ISOLATION,
            enforce_db_readonly=enforce_db_readonly,
        )

    # ----------------------- Validation utilities ---------------------------

    def require_actor(self) -> int:
        """
        Return the authenticated account id from the context.

        :raises RuntimeError: When called without an authenticated context;
            routes guarded by ``require_auth`` always provide one.
        """
        if self.ctx.actor_id is None:
            raise RuntimeError("Service requires an authenticated actor in its context.")
        return self.ctx.actor_id

    @staticmethod
    def ensure_password_policy(password: str | None) -> None:
        """Reject passwords shorter than :data:`PASSWORD_MIN_LENGTH`."""
        if not password or len(password) < PASSWORD_MIN_LENGTH:
            raise ValidationError(
                f"Password must be at least {PASSWORD_MIN_LENGTH} characters long"
            )

    # --------------------------- AuthZ --------------------------------

    def ensure_owner(self, actor_id: int | None, owner_id: int, *, msg: str | None = None) -> None:
        """
        Ensure the current actor owns the resource.

        :param actor_id: Authenticated account id.
        :param owner_id: Owner account id stored on the resource.
        :param msg: Optional custom error message.
        :raises ForbiddenError: If the actor is not the owner.
        """
        if actor_id is None or int(actor_id) != int(owner_id):
            raise ForbiddenError(msg or "Only the owner can modify this resource")
