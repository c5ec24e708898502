"""Subscription model: a subscriber following a channel."""

from __future__ import annotations

from sqlalchemy import CheckConstraint, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from vidtube.core.extensions import db

from .base import CreatedAtMixin, PKMixin, ReprMixin


class Subscription(PKMixin, ReprMixin, CreatedAtMixin, db.Model):
    """Edge ``subscriber -> channel``; both ends are accounts."""

    __tablename__ = "subscriptions"

    subscriber_id: Mapped[int] = mapped_column(
        ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False, index=True
    )
    channel_id: Mapped[int] = mapped_column(
        ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False, index=True
    )

    __table_args__ = (
        UniqueConstraint("subscriber_id", "channel_id", name="uq_subscriptions_pair"),
        CheckConstraint("subscriber_id <> channel_id", name="not_self"),
    )
