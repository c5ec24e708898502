# comments in English; reST docstrings
from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from vidtube.services._shared.ports import RefreshTokenStore
from vidtube.uow import SQLAlchemyUnitOfWork, UnitOfWork


@dataclass(slots=True)
class SQLRefreshTokenStore(RefreshTokenStore):
    """
    Refresh token slot stored on the ``accounts.refresh_token`` column.

    Every call runs in its own read-write Unit of Work and touches only that
    column, so model validators and password hashing never run.

    :param uow_factory: Callable returning a fresh Unit of Work.
    """

    uow_factory: Callable[[], UnitOfWork] = SQLAlchemyUnitOfWork

    def current(self, account_id: int) -> str | None:
        with self.uow_factory() as uow:
            return uow.accounts.get_refresh_token(account_id)

    def replace(self, account_id: int, token: str) -> None:
        with self.uow_factory() as uow:
            uow.accounts.set_refresh_token(account_id, token)

    def clear(self, account_id: int) -> None:
        with self.uow_factory() as uow:
            uow.accounts.set_refresh_token(account_id, None)
