"""Account model: the identity behind every channel, tweet and like."""

from __future__ import annotations

from typing import Any

from sqlalchemy import String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, validates
from werkzeug.security import check_password_hash, generate_password_hash

from vidtube.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin


class Account(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Registered user and channel owner.

    Fields
    ------
    username : str
        Public handle. Stored lower-cased and unique.
    email : str
        Contact address. Stored trimmed, lower-cased and unique.
    full_name : str
        Display name.
    password_hash : str
        One-way hash (write-only setter via ``password``).
    avatar_public_id / avatar_url : str
        Asset gateway reference of the required avatar image.
    cover_image_public_id / cover_image_url : str
        Asset gateway reference of the optional cover image; empty strings
        when absent.
    refresh_token : str | None
        The single live refresh token. ``None`` after logout.
    """

    __tablename__ = "accounts"

    username: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[str] = mapped_column(String(254), nullable=False)
    full_name: Mapped[str] = mapped_column(String(100), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(254), nullable=False)
    avatar_public_id: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    avatar_url: Mapped[str] = mapped_column(String(1024), nullable=False, default="")
    cover_image_public_id: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    cover_image_url: Mapped[str] = mapped_column(String(1024), nullable=False, default="")
    refresh_token: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        UniqueConstraint("email", name="uq_accounts_email"),
        UniqueConstraint("username", name="uq_accounts_username"),
    )

    # -------------------- Password API --------------------
    @property
    def password(self) -> Any:  # pragma: no cover - explicit write-only contract
        """
        Disallow reading passwords.

        :raises AttributeError: Always, to ensure password is write-only.
        """
        raise AttributeError("Password is write-only.")

    @password.setter
    def password(self, raw: str) -> None:
        """
        Hash and set the password.

        This is the only place a credential gets hashed; saving unrelated
        fields never re-hashes.

        :param raw: Plain text password to hash.
        :type raw: str
        """
        if not isinstance(raw, str) or not raw:
            raise ValueError("Password must be a non-empty string.")
        self.password_hash = generate_password_hash(raw)

    def verify_password(self, raw: str) -> bool:
        """
        Verify a password against the stored hash.

        :param raw: Plain text password candidate.
        :type raw: str
        :returns: ``True`` if it matches; otherwise ``False``.
        :rtype: bool
        """
        if not self.password_hash or not isinstance(raw, str):
            return False
        return bool(check_password_hash(self.password_hash, raw))

    # -------------------- Validators --------------------
    @validates("email")
    def _normalize_email(self, key: str, value: str) -> str:
        """
        Normalize email to its stored form (trimmed, lower-cased).

        :raises ValueError: If email is missing or has no ``@``.
        """
        if not value or not isinstance(value, str):
            raise ValueError("Email is required.")
        v = value.strip().lower()
        if "@" not in v:
            raise ValueError("Email format looks invalid.")
        return v

    @validates("username")
    def _normalize_username(self, key: str, value: str) -> str:
        """
        Normalize username to its stored form (trimmed, lower-cased).

        :raises ValueError: If username is missing or only whitespace.
        """
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Username is required.")
        return value.strip().lower()
