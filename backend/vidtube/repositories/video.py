"""Video and comment repositories."""

from __future__ import annotations

from typing import cast

from sqlalchemy import select

from vidtube.models.video import Comment, Video, WatchHistoryEntry
from vidtube.repositories.base import BaseRepository


class VideoRepository(BaseRepository[Video]):
    """Read-side access to videos (owner is eagerly joined by the mapping)."""

    model = Video

    def watched_by(self, account_id: int) -> list[Video]:
        """Return the videos an account has watched, oldest view first.

        :param account_id: Viewer account id.
        :type account_id: int
        :returns: Videos in watch order; repeated views repeat the video.
        :rtype: list[Video]
        """
        stmt = (
            select(Video)
            .join(WatchHistoryEntry, WatchHistoryEntry.video_id == Video.id)
            .where(WatchHistoryEntry.account_id == account_id)
            .order_by(WatchHistoryEntry.watched_at.asc(), WatchHistoryEntry.id.asc())
        )
        return list(self.session.execute(stmt).scalars().all())

    def latest_published_for(self, owner_id: int) -> Video | None:
        """Return the newest published video of a channel, if any."""
        stmt = (
            select(Video)
            .where(Video.owner_id == owner_id, Video.is_published.is_(True))
            .order_by(Video.created_at.desc(), Video.id.desc())
            .limit(1)
        )
        return cast(Video | None, self.session.execute(stmt).scalars().first())


class CommentRepository(BaseRepository[Comment]):
    """Comments are only looked up here (as like targets)."""

    model = Comment
