"""TweetService: post, list, edit and delete short text posts."""

from __future__ import annotations

import logging

from vidtube.models.tweet import Tweet
from vidtube.services._shared.base import BaseService
from vidtube.services._shared.errors import NotFoundError, ValidationError
from vidtube.services.tweets.dto import TweetFeedItemOut, TweetOut, TweetOwnerOut

logger = logging.getLogger(__name__)


def _to_tweet_out(tweet: Tweet) -> TweetOut:
    return TweetOut(
        id=tweet.id,
        owner_id=tweet.owner_id,
        content=tweet.content,
        created_at=tweet.created_at,
        updated_at=tweet.updated_at,
    )


def _require_content(content: str | None) -> str:
    if not (content or "").strip():
        raise ValidationError("Content is required")
    return content.strip()


class TweetService(BaseService):
    """Tweets of the authenticated caller; only the owner may edit or delete."""

    def create_tweet(self, content: str | None) -> TweetOut:
        text = _require_content(content)
        actor_id = self.require_actor()
        with self.rw_uow() as uow:
            tweet = uow.tweets.add(Tweet(owner_id=actor_id, content=text))
            out = _to_tweet_out(tweet)
        logger.info("Tweet created", extra={"account_id": actor_id})
        return out

    def list_user_tweets(self, user_id: int) -> list[TweetFeedItemOut]:
        """
        List a channel's tweets, newest first.

        :param user_id: Channel account id.
        :raises NotFoundError: Unknown account.
        """
        actor_id = self.require_actor()
        with self.ro_uow() as uow:
            if not uow.accounts.exists(id=user_id):
                raise NotFoundError("Account", user_id, detail="User not found")
            rows = uow.tweets.list_for_owner(user_id, viewer_id=actor_id)
            return [
                TweetFeedItemOut(
                    id=tweet.id,
                    content=tweet.content,
                    owner=TweetOwnerOut(
                        username=tweet.owner.username,
                        avatar_url=tweet.owner.avatar_url,
                    ),
                    likes_count=likes_count,
                    is_liked=is_liked,
                    created_at=tweet.created_at,
                    updated_at=tweet.updated_at,
                )
                for tweet, likes_count, is_liked in rows
            ]

    def update_tweet(self, tweet_id: int, content: str | None) -> TweetOut:
        """
        Replace a tweet's content.

        :raises ValidationError: Blank content.
        :raises NotFoundError: Unknown tweet.
        :raises ForbiddenError: Caller is not the author.
        """
        text = _require_content(content)
        actor_id = self.require_actor()
        with self.rw_uow() as uow:
            tweet = self._get_owned(uow.tweets.get(tweet_id), tweet_id, actor_id, "edit")
            uow.tweets.update(tweet, content=text)
            return _to_tweet_out(tweet)

    def delete_tweet(self, tweet_id: int) -> None:
        actor_id = self.require_actor()
        with self.rw_uow() as uow:
            tweet = self._get_owned(uow.tweets.get(tweet_id), tweet_id, actor_id, "delete")
            uow.likes.delete_for_target("tweet", tweet.id)
            uow.tweets.delete(tweet)

    def _get_owned(self, tweet: Tweet | None, tweet_id: int, actor_id: int, verb: str) -> Tweet:
        if tweet is None:
            raise NotFoundError("Tweet", tweet_id, detail="Tweet not found")
        self.ensure_owner(actor_id, tweet.owner_id, msg=f"Only the owner can {verb} their tweet")
        return tweet
