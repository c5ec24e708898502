"""Tweet model: short text posts on a channel."""

from __future__ import annotations

from sqlalchemy import ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from vidtube.core.extensions import db

from .account import Account
from .base import PKMixin, ReprMixin, TimestampMixin


class Tweet(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """Short post authored by ``owner``."""

    __tablename__ = "tweets"

    owner_id: Mapped[int] = mapped_column(
        ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False, index=True
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)

    owner: Mapped[Account] = relationship(lazy="joined")

    @validates("content")
    def _strip_content(self, key: str, value: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Content is required.")
        return value.strip()
