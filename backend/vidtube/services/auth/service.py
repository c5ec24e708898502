# vidtube/services/auth/service.py
from __future__ import annotations

import hmac
import logging
from typing import Any

from vidtube.services._shared.base import BaseService, ServiceContext
from vidtube.services._shared.converters import to_account_out
from vidtube.services._shared.dto import AccountOut
from vidtube.services._shared.errors import (
    AuthenticationError,
    InternalError,
    NotFoundError,
    TokenError,
    UnauthorizedError,
    ValidationError,
)
from vidtube.services._shared.ports import RefreshTokenStore, TokenClass, TokenProvider
from vidtube.services.auth.dto import LoginIn, LoginOut, RefreshIn, TokenPairOut

logger = logging.getLogger(__name__)


class AuthService(BaseService):
    """
    Authentication lifecycle service (login / refresh / logout / guard).

    Tokens are issued and verified through a :class:`TokenProvider`. The
    single live refresh token of each account sits in a
    :class:`RefreshTokenStore`; a refresh is accepted only while the supplied
    token equals the stored one, so every rotation invalidates the previous
    value.
    """

    def __init__(
        self,
        *,
        token_provider: TokenProvider,
        refresh_store: RefreshTokenStore,
        ctx: ServiceContext | None = None,
    ) -> None:
        """
        Initialize the service with its dependencies.

        :param token_provider: Adapter for issuing/verifying JWTs.
        :param refresh_store: Storage of the live refresh token per account.
        :param ctx: Request-scoped context.
        """
        super().__init__(ctx=ctx)
        self.tokens = token_provider
        self.refresh_store = refresh_store

    # ------------------------------------------------------------------ #
    # Session store operations
    # ------------------------------------------------------------------ #

    def rotate_refresh_token(self, account_id: int) -> str:
        """
        Issue a refresh token and make it the only live one for the account.

        :param account_id: Account identifier.
        :returns: The new encoded refresh token.
        """
        token = self.tokens.issue_refresh_token(account_id)
        self.refresh_store.replace(account_id, token)
        return token

    def clear_refresh_token(self, account_id: int) -> None:
        self.refresh_store.clear(account_id)

    # ------------------------------------------------------------------ #
    # Login
    # ------------------------------------------------------------------ #

    def login(self, dto: LoginIn) -> LoginOut:
        """
        Authenticate credentials and issue a token pair.

        :param dto: Login input.
        :returns: Sanitized account and tokens.
        :raises ValidationError: Neither username nor email supplied.
        :raises NotFoundError: No account matches.
        :raises AuthenticationError: Wrong password.
        """
        username = (dto.username or "").strip()
        email = (dto.email or "").strip()
        if not username and not email:
            raise ValidationError("username or email is required")

        with self.ro_uow() as uow:
            account = uow.accounts.find_by_username_or_email(username=username, email=email)
            if account is None:
                raise NotFoundError("Account", username or email, detail="User does not exist")
            if not account.verify_password(dto.password):
                logger.info("Login rejected", extra={"account_id": account.id})
                raise AuthenticationError("Invalid user credentials")
            account_id = account.id
            claims = self._access_claims(account.username, account.email)

        access = self.tokens.issue_access_token(account_id, claims=claims)
        refresh = self.rotate_refresh_token(account_id)

        sanitized = self._load_sanitized(account_id)
        logger.info("Login succeeded", extra={"account_id": account_id})
        return LoginOut(
            account=sanitized,
            tokens=TokenPairOut(access_token=access, refresh_token=refresh),
        )

    # ------------------------------------------------------------------ #
    # Refresh with rotation
    # ------------------------------------------------------------------ #

    def refresh(self, dto: RefreshIn) -> TokenPairOut:
        """
        Exchange a live refresh token for a new pair.

        Security
        --------
        - The token must verify as a refresh token.
        - It must equal the stored value: a replayed (already rotated) or
          logged-out token is rejected.

        :raises UnauthorizedError: On any failure.
        """
        incoming = (dto.refresh_token or "").strip()
        if not incoming:
            raise UnauthorizedError("Unauthorized request")

        try:
            claims = self.tokens.verify(incoming, TokenClass.REFRESH)
        except TokenError as exc:
            raise UnauthorizedError(exc.message) from exc

        account_id = self._coerce_account_id(claims.get("sub"), "Invalid refresh token")

        with self.ro_uow() as uow:
            account = uow.accounts.get_sanitized(account_id)
            if account is None:
                raise UnauthorizedError("Invalid refresh token")
            access_claims = self._access_claims(account.username, account.email)

        stored = self.refresh_store.current(account_id) or ""
        if not hmac.compare_digest(stored.encode(), incoming.encode()):
            logger.info("Refresh token reuse rejected", extra={"account_id": account_id})
            raise UnauthorizedError("Refresh token is expired or used")

        access = self.tokens.issue_access_token(account_id, claims=access_claims)
        refresh = self.rotate_refresh_token(account_id)
        return TokenPairOut(access_token=access, refresh_token=refresh)

    # ------------------------------------------------------------------ #
    # Logout
    # ------------------------------------------------------------------ #

    def logout(self) -> None:
        """Clear the caller's stored refresh token (identity from the context)."""
        account_id = self.require_actor()
        self.clear_refresh_token(account_id)
        logger.info("Logout", extra={"account_id": account_id})

    # ------------------------------------------------------------------ #
    # Guard
    # ------------------------------------------------------------------ #

    def authenticate_access(self, token: str | None) -> AccountOut:
        """
        Resolve an access token to the sanitized caller account.

        :param token: Encoded access token (cookie or bearer).
        :returns: Sanitized account.
        :raises UnauthorizedError: Token absent, invalid, expired, or the
            account no longer exists.
        """
        if not token:
            raise UnauthorizedError("Unauthorized request")
        try:
            claims = self.tokens.verify(token, TokenClass.ACCESS)
        except TokenError as exc:
            raise UnauthorizedError(exc.message) from exc

        account_id = self._coerce_account_id(claims.get("sub"), "Invalid access token")
        with self.ro_uow() as uow:
            account = uow.accounts.get_sanitized(account_id)
            if account is None:
                raise UnauthorizedError("Invalid access token")
            return to_account_out(account)

    # ------------------------------------------------------------------ #
    # Utilities
    # ------------------------------------------------------------------ #

    @staticmethod
    def _access_claims(username: str, email: str) -> dict[str, Any]:
        return {"username": username, "email": email}

    @staticmethod
    def _coerce_account_id(subject: Any, message: str) -> int:
        """Ensure the JWT subject can be treated as an integer account id."""
        if isinstance(subject, int):
            return subject
        if isinstance(subject, str) and subject.isdigit():
            return int(subject)
        raise UnauthorizedError(message)

    def _load_sanitized(self, account_id: int) -> AccountOut:
        with self.ro_uow() as uow:
            account = uow.accounts.get_sanitized(account_id)
            if account is None:
                raise InternalError("Account vanished while signing in")
            return to_account_out(account)
