# vidtube/infra/jwt/pyjwt_token_provider.py
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import uuid4

import jwt

from vidtube.services._shared.errors import ExpiredTokenError, InvalidTokenError
from vidtube.services._shared.ports import TokenClass, TokenProvider


@dataclass(slots=True)
class JWTTokenProvider(TokenProvider):
    """
    PyJWT adapter with one HMAC secret per token class.

    A token signed for one class never verifies as the other: the secrets
    differ and the ``type`` claim is checked as well.

    :param access_secret: Secret for access tokens.
    :param refresh_secret: Secret for refresh tokens.
    :param access_expires: Access token lifetime.
    :param refresh_expires: Refresh token lifetime.
    :param algorithm: HMAC algorithm name understood by PyJWT.
    """

    access_secret: str
    refresh_secret: str
    access_expires: timedelta = timedelta(minutes=15)
    refresh_expires: timedelta = timedelta(days=10)
    algorithm: str = "HS256"

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> JWTTokenProvider:
        """Build the provider from Flask config keys (lifetimes in seconds)."""
        return cls(
            access_secret=config["ACCESS_TOKEN_SECRET"],
            refresh_secret=config["REFRESH_TOKEN_SECRET"],
            access_expires=timedelta(seconds=int(config["ACCESS_TOKEN_EXPIRES"])),
            refresh_expires=timedelta(seconds=int(config["REFRESH_TOKEN_EXPIRES"])),
            algorithm=config.get("JWT_ALGORITHM", "HS256"),
        )

    # ------------------------------------------------------------------ #

    def _secret(self, token_class: TokenClass) -> str:
        return self.access_secret if token_class is TokenClass.ACCESS else self.refresh_secret

    def _encode(
        self,
        account_id: int,
        token_class: TokenClass,
        lifetime: timedelta,
        claims: dict[str, Any] | None = None,
    ) -> str:
        now = datetime.now(UTC)
        payload: dict[str, Any] = dict(claims or {})
        # Registered claims always win over caller-supplied ones
        payload.update(
            {
                "sub": str(account_id),
                "type": token_class.value,
                "jti": uuid4().hex,
                "iat": now,
                "exp": now + lifetime,
            }
        )
        return jwt.encode(payload, self._secret(token_class), algorithm=self.algorithm)

    def issue_access_token(self, account_id: int, *, claims: dict[str, Any] | None = None) -> str:
        return self._encode(account_id, TokenClass.ACCESS, self.access_expires, claims)

    def issue_refresh_token(self, account_id: int) -> str:
        return self._encode(account_id, TokenClass.REFRESH, self.refresh_expires)

    def verify(self, token: str, token_class: TokenClass) -> dict[str, Any]:
        """
        Decode and validate a token of the expected class.

        :param token: Encoded JWT.
        :type token: str
        :param token_class: Expected class; selects the secret.
        :type token_class: TokenClass
        :returns: Token claims.
        :rtype: dict[str, Any]
        :raises ExpiredTokenError: When ``exp`` is in the past.
        :raises InvalidTokenError: On any other verification failure.
        """
        try:
            claims: dict[str, Any] = jwt.decode(
                token,
                self._secret(token_class),
                algorithms=[self.algorithm],
                options={"require": ["sub", "exp", "iat"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise ExpiredTokenError(f"{token_class.value.capitalize()} token has expired") from exc
        except jwt.InvalidTokenError as exc:
            raise InvalidTokenError(f"Invalid {token_class.value} token") from exc

        if claims.get("type") != token_class.value:
            raise InvalidTokenError(f"Invalid {token_class.value} token")
        return claims
