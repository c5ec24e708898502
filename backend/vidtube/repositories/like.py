"""Like repository."""

from __future__ import annotations

from typing import cast

from sqlalchemy import delete, select

from vidtube.models.like import Like
from vidtube.models.video import Video
from vidtube.repositories.base import BaseRepository

# Public target name -> foreign key column on ``likes``
TARGET_COLUMNS = {
    "video": Like.video_id,
    "comment": Like.comment_id,
    "tweet": Like.tweet_id,
}


class LikeRepository(BaseRepository[Like]):
    """Persistence-only repository for :class:`Like`."""

    model = Like

    def find_for(self, account_id: int, target: str, target_id: int) -> Like | None:
        """Return the like ``account_id`` left on a target, if any.

        :param account_id: Liking account.
        :type account_id: int
        :param target: One of ``"video"``, ``"comment"``, ``"tweet"``.
        :type target: str
        :param target_id: Target primary key.
        :type target_id: int
        :raises KeyError: On an unknown target name.
        """
        column = TARGET_COLUMNS[target]
        stmt = select(Like).where(Like.liked_by_id == account_id, column == target_id)
        return cast(Like | None, self.session.execute(stmt).scalars().first())

    def delete_for_target(self, target: str, target_id: int) -> int:
        """Remove every like on a target; returns the number of rows deleted."""
        column = TARGET_COLUMNS[target]
        result = self.session.execute(delete(Like).where(column == target_id))
        return int(result.rowcount or 0)

    def liked_videos(self, account_id: int) -> list[Video]:
        """Return the videos liked by an account, most recent like first."""
        stmt = (
            select(Video)
            .join(Like, Like.video_id == Video.id)
            .where(Like.liked_by_id == account_id)
            .order_by(Like.created_at.desc(), Like.id.desc())
        )
        return list(self.session.execute(stmt).scalars().all())
