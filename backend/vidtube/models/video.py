"""Video catalogue models: videos, their comments and per-account watch history."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Float, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vidtube.core.extensions import db

from .account import Account
from .base import PKMixin, ReprMixin, TimestampMixin


class Video(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Published media owned by a channel.

    Videos are referenced by likes, watch history and channel listings; this
    service reads them but does not upload or transcode them.
    """

    __tablename__ = "videos"

    owner_id: Mapped[int] = mapped_column(
        ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    video_file_url: Mapped[str] = mapped_column(String(1024), nullable=False)
    thumbnail_url: Mapped[str] = mapped_column(String(1024), nullable=False, default="")
    duration: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    views: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_published: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    owner: Mapped[Account] = relationship(lazy="joined")


class Comment(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """A comment left by an account under a video."""

    __tablename__ = "comments"

    video_id: Mapped[int] = mapped_column(
        ForeignKey("videos.id", ondelete="CASCADE"), nullable=False, index=True
    )
    owner_id: Mapped[int] = mapped_column(
        ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False, index=True
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)


class WatchHistoryEntry(PKMixin, db.Model):
    """One view of a video by an account; ordered by ``watched_at``."""

    __tablename__ = "watch_history"

    account_id: Mapped[int] = mapped_column(
        ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False, index=True
    )
    video_id: Mapped[int] = mapped_column(
        ForeignKey("videos.id", ondelete="CASCADE"), nullable=False, index=True
    )
    watched_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    video: Mapped[Video] = relationship(lazy="joined")
