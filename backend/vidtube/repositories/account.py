"""Account repository: lookups, sanitized projections and the refresh-token slot."""

from __future__ import annotations

from typing import cast

from sqlalchemy import or_, select, update
from sqlalchemy.orm import defer

from vidtube.models.account import Account
from vidtube.repositories.base import BaseRepository


class AccountRepository(BaseRepository[Account]):
    """Persistence-only repository for :class:`Account`.

    It never issues tokens; it only stores and reads back the single live
    refresh token value.
    """

    model = Account

    # password_hash and refresh_token are written through dedicated paths
    updatable = frozenset(
        {
            "email",
            "username",
            "full_name",
            "avatar_public_id",
            "avatar_url",
            "cover_image_public_id",
            "cover_image_url",
        }
    )

    # ---------------------------- Lookup helpers ----------------------------

    def get_by_username(self, username: str) -> Account | None:
        """Fetch an account by handle (stored lower-cased).

        :param username: Handle to normalise and search.
        :type username: str
        :returns: Account or ``None``.
        :rtype: Account | None
        """
        stmt = select(Account).where(Account.username == username.strip().lower())
        return cast(Account | None, self.session.execute(stmt).scalars().first())

    def get_by_email(self, email: str) -> Account | None:
        """Fetch an account by contact address (case-insensitive).

        :param email: Email address to normalise and search.
        :type email: str
        :returns: Account or ``None``.
        :rtype: Account | None
        """
        stmt = select(Account).where(Account.email == email.strip().lower())
        return cast(Account | None, self.session.execute(stmt).scalars().first())

    def find_by_username_or_email(
        self, *, username: str | None = None, email: str | None = None
    ) -> Account | None:
        """Return the first account matching the handle OR the contact address.

        Blank or missing keys are ignored; with neither key supplied the
        result is ``None``.

        :param username: Candidate handle.
        :type username: str | None
        :param email: Candidate contact address.
        :type email: str | None
        :returns: Matching account or ``None``.
        :rtype: Account | None
        """
        clauses = []
        if username and username.strip():
            clauses.append(Account.username == username.strip().lower())
        if email and email.strip():
            clauses.append(Account.email == email.strip().lower())
        if not clauses:
            return None
        stmt = select(Account).where(or_(*clauses)).order_by(Account.id)
        return cast(Account | None, self.session.execute(stmt).scalars().first())

    def exists_by_username_or_email(self, *, username: str, email: str) -> bool:
        """Return ``True`` when either the handle or the contact address is taken."""
        return self.find_by_username_or_email(username=username, email=email) is not None

    def get_sanitized(self, account_id: int) -> Account | None:
        """Load an account without its credential hash and refresh token columns.

        :param account_id: Account primary key.
        :type account_id: int
        :returns: Account with ``password_hash`` and ``refresh_token`` deferred.
        :rtype: Account | None
        """
        stmt = (
            select(Account)
            .options(defer(Account.password_hash), defer(Account.refresh_token))
            .where(Account.id == account_id)
        )
        return cast(Account | None, self.session.execute(stmt).scalars().first())

    # ---------------------------- Refresh token slot ----------------------------

    def get_refresh_token(self, account_id: int) -> str | None:
        """Return the stored refresh token, or ``None`` if absent or unknown account."""
        stmt = select(Account.refresh_token).where(Account.id == account_id)
        return cast(str | None, self.session.execute(stmt).scalar_one_or_none())

    def set_refresh_token(self, account_id: int, token: str | None) -> bool:
        """Overwrite the refresh token column with a targeted ``UPDATE``.

        Only this column changes, so model validators and the password
        setter never run.

        :param account_id: Account primary key.
        :type account_id: int
        :param token: New token, or ``None`` to clear the slot.
        :type token: str | None
        :returns: ``True`` when a row was updated.
        :rtype: bool
        """
        stmt = (
            update(Account)
            .where(Account.id == account_id)
            .values(refresh_token=token)
            .execution_options(synchronize_session="fetch")
        )
        result = self.session.execute(stmt)
        return bool(result.rowcount)

    # ---------------------------- Password ops ----------------------------

    def update_password(self, account: Account, new_password: str) -> None:
        """Hash and assign a new password, then flush.

        :param account: Loaded account to mutate.
        :type account: Account
        :param new_password: Raw password; the model setter hashes it.
        :type new_password: str
        """
        account.password = new_password
        self.flush()
