from __future__ import annotations

import threading
from typing import Protocol


class RefreshTokenStore(Protocol):
    """
    The single live refresh token per account.

    A refresh token is accepted only while it equals :meth:`current`;
    :meth:`replace` therefore invalidates the previous value immediately.
    """

    def current(self, account_id: int) -> str | None:
        """Return the stored token, or ``None`` when cleared or unknown."""

    def replace(self, account_id: int, token: str) -> None:
        """Overwrite the stored token without touching any other field."""

    def clear(self, account_id: int) -> None:
        """Forget the stored token (logout)."""


class InMemoryRefreshTokenStore(RefreshTokenStore):
    """Dictionary-backed store for unit tests."""

    def __init__(self) -> None:
        self._tokens: dict[int, str] = {}
        self._lock = threading.Lock()

    def current(self, account_id: int) -> str | None:
        return self._tokens.get(account_id)

    def replace(self, account_id: int, token: str) -> None:
        with self._lock:
            self._tokens[account_id] = token

    def clear(self, account_id: int) -> None:
        with self._lock:
            self._tokens.pop(account_id, None)
