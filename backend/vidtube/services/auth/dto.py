# vidtube/services/auth/dto.py
from __future__ import annotations

from dataclasses import dataclass

from vidtube.services._shared.base import ServiceContext
from vidtube.services._shared.dto import AccountOut

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for login. At least one of ``username``/``email`` is required.

    :param username: Handle (matched lower-cased).
    :type username: str | None
    :param email: Contact address.
    :type email: str | None
    :param password: Raw password (to be verified).
    :type password: str
    """

    password: str
    username: str | None = None
    email: str | None = None


@dataclass(frozen=True, slots=True)
class RefreshIn:
    """
    Input DTO for token refresh.

    :param refresh_token: Encoded refresh JWT from the cookie or the body.
    :type refresh_token: str | None
    """

    refresh_token: str | None


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class TokenPairOut:
    """
    Output DTO with access and refresh tokens.

    :param access_token: Encoded access JWT.
    :type access_token: str
    :param refresh_token: Encoded refresh JWT.
    :type refresh_token: str
    """

    access_token: str
    refresh_token: str


@dataclass(frozen=True, slots=True)
class LoginOut:
    """Sanitized account plus the freshly issued token pair."""

    account: AccountOut
    tokens: TokenPairOut


@dataclass(frozen=True, slots=True)
class AuthContext:
    """
    Authenticated caller, built once per request by the auth guard.

    :param account: Sanitized caller account.
    :type account: AccountOut
    :param ctx: Service context carrying ``actor_id`` and ``request_id``.
    :type ctx: ServiceContext
    """

    account: AccountOut
    ctx: ServiceContext

    @property
    def account_id(self) -> int:
        return self.account.id
