"""Like model: an account's like on exactly one video, comment or tweet."""

from __future__ import annotations

from sqlalchemy import CheckConstraint, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from vidtube.core.extensions import db

from .base import CreatedAtMixin, PKMixin, ReprMixin


class Like(PKMixin, ReprMixin, CreatedAtMixin, db.Model):
    """
    Polymorphic like.

    Exactly one of ``video_id``, ``comment_id`` or ``tweet_id`` is set, and an
    account likes a given target at most once.
    """

    __tablename__ = "likes"

    liked_by_id: Mapped[int] = mapped_column(
        ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False, index=True
    )
    video_id: Mapped[int | None] = mapped_column(
        ForeignKey("videos.id", ondelete="CASCADE"), nullable=True, index=True
    )
    comment_id: Mapped[int | None] = mapped_column(
        ForeignKey("comments.id", ondelete="CASCADE"), nullable=True, index=True
    )
    tweet_id: Mapped[int | None] = mapped_column(
        ForeignKey("tweets.id", ondelete="CASCADE"), nullable=True, index=True
    )

    __table_args__ = (
        CheckConstraint(
            "(CASE WHEN video_id IS NULL THEN 0 ELSE 1 END"
            " + CASE WHEN comment_id IS NULL THEN 0 ELSE 1 END"
            " + CASE WHEN tweet_id IS NULL THEN 0 ELSE 1 END) = 1",
            name="one_target",
        ),
        UniqueConstraint("liked_by_id", "video_id", name="uq_likes_liked_by_video"),
        UniqueConstraint("liked_by_id", "comment_id", name="uq_likes_liked_by_comment"),
        UniqueConstraint("liked_by_id", "tweet_id", name="uq_likes_liked_by_tweet"),
    )
