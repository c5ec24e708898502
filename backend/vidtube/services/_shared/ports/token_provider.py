from __future__ import annotations

from enum import Enum
from typing import Any, Protocol

from vidtube.services._shared.errors import ExpiredTokenError, InvalidTokenError


class TokenClass(str, Enum):
    """The two token classes; each one is signed with its own secret."""

    ACCESS = "access"
    REFRESH = "refresh"


class TokenProvider(Protocol):
    """Port for issuing and verifying signed, time-limited tokens."""

    def issue_access_token(
        self, account_id: int, *, claims: dict[str, Any] | None = None
    ) -> str: ...

    def issue_refresh_token(self, account_id: int) -> str: ...

    def verify(self, token: str, token_class: TokenClass) -> dict[str, Any]:
        """
        Return the claims of a valid token of ``token_class``.

        :raises InvalidTokenError: Bad signature, malformed or wrong class.
        :raises ExpiredTokenError: Signature valid but ``exp`` is past.
        """
        ...


class StubTokenProvider(TokenProvider):
    """Deterministic token provider used in unit tests.

    Tokens are opaque strings; :meth:`expire` marks one as expired.
    """

    def __init__(self) -> None:
        self._seq = 0
        self._issued: dict[str, dict[str, Any]] = {}
        self._expired: set[str] = set()

    def _mk(self, account_id: int, token_class: TokenClass, claims: dict[str, Any] | None) -> str:
        self._seq += 1
        token = f"{token_class.value}.{account_id}.{self._seq}"
        payload: dict[str, Any] = {
            "sub": str(account_id),
            "type": token_class.value,
            "jti": f"jti-{self._seq}",
        }
        if claims:
            payload.update(claims)
        self._issued[token] = payload
        return token

    def issue_access_token(self, account_id: int, *, claims: dict[str, Any] | None = None) -> str:
        return self._mk(account_id, TokenClass.ACCESS, claims)

    def issue_refresh_token(self, account_id: int) -> str:
        return self._mk(account_id, TokenClass.REFRESH, None)

    def expire(self, token: str) -> None:
        self._expired.add(token)

    def verify(self, token: str, token_class: TokenClass) -> dict[str, Any]:
        payload = self._issued.get(token)
        if payload is None or payload["type"] != token_class.value:
            raise InvalidTokenError()
        if token in self._expired:
            raise ExpiredTokenError()
        return dict(payload)
