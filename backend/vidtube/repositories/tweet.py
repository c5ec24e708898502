"""Tweet repository with the per-viewer feed projection."""

from __future__ import annotations

from sqlalchemy import func, select

from vidtube.models.like import Like
from vidtube.models.tweet import Tweet
from vidtube.repositories.base import BaseRepository


class TweetRepository(BaseRepository[Tweet]):
    """Persistence-only repository for :class:`Tweet`."""

    model = Tweet

    updatable = frozenset({"content"})

    def list_for_owner(
        self, owner_id: int, *, viewer_id: int | None
    ) -> list[tuple[Tweet, int, bool]]:
        """List a channel's tweets, newest first, with like aggregates.

        :param owner_id: Channel whose tweets are listed.
        :type owner_id: int
        :param viewer_id: Caller used for the ``is_liked`` flag.
        :type viewer_id: int | None
        :returns: ``(tweet, likes_count, is_liked)`` tuples.
        :rtype: list[tuple[Tweet, int, bool]]
        """
        likes_count = (
            select(func.count(Like.id))
            .where(Like.tweet_id == Tweet.id)
            .correlate(Tweet)
            .scalar_subquery()
        )
        is_liked = (
            select(Like.id)
            .where(Like.tweet_id == Tweet.id, Like.liked_by_id == viewer_id)
            .correlate(Tweet)
            .exists()
        )
        stmt = (
            select(Tweet, likes_count.label("likes_count"), is_liked.label("is_liked"))
            .where(Tweet.owner_id == owner_id)
            .order_by(Tweet.created_at.desc(), Tweet.id.desc())
        )
        rows = self.session.execute(stmt).all()
        return [(tweet, int(count or 0), bool(liked)) for tweet, count, liked in rows]
