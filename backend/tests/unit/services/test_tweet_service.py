"""Unit tests for TweetService."""

from __future__ import annotations

import pytest

from tests.factories.account import AccountFactory
from tests.factories.social import LikeFactory
from tests.factories.tweet import TweetFactory
from vidtube.models import Like, Tweet
from vidtube.services._shared.base import ServiceContext
from vidtube.services._shared.errors import ForbiddenError, NotFoundError, ValidationError
from vidtube.services.tweets import TweetService


@pytest.fixture()
def author(session):
    account = AccountFactory(username="author")
    session.commit()
    return account


def _as(account) -> TweetService:
    return TweetService(ctx=ServiceContext(actor_id=account.id))


def test_create_tweet_trims_content(author):
    out = _as(author).create_tweet("  hello world  ")

    assert out.content == "hello world"
    assert out.owner_id == author.id


@pytest.mark.parametrize("content", ["", "   ", None])
def test_create_tweet_requires_content(author, content):
    with pytest.raises(ValidationError, match="Content is required"):
        _as(author).create_tweet(content)


def test_list_user_tweets_newest_first_with_likes(author, session):
    viewer = AccountFactory()
    older = TweetFactory(owner=author, content="older")
    newer = TweetFactory(owner=author, content="newer")
    LikeFactory(liked_by_id=viewer.id, tweet_id=older.id)
    session.commit()

    feed = _as(viewer).list_user_tweets(author.id)

    assert [t.id for t in feed] == [newer.id, older.id]
    assert feed[1].likes_count == 1
    assert feed[1].is_liked is True
    assert feed[0].is_liked is False
    assert feed[0].owner.username == "author"


def test_list_user_tweets_unknown_user(author):
    with pytest.raises(NotFoundError, match="User not found"):
        _as(author).list_user_tweets(987654)


def test_update_tweet_by_owner(author, session):
    tweet = TweetFactory(owner=author)
    session.commit()

    assert _as(author).update_tweet(tweet.id, " edited ").content == "edited"


def test_update_tweet_by_non_owner_forbidden(author, session):
    tweet = TweetFactory(owner=author, content="original")
    intruder = AccountFactory()
    session.commit()

    with pytest.raises(ForbiddenError, match="Only the owner can edit their tweet"):
        _as(intruder).update_tweet(tweet.id, "hijacked")
    session.expire_all()
    assert session.get(Tweet, tweet.id).content == "original"


def test_update_missing_tweet(author):
    with pytest.raises(NotFoundError, match="Tweet not found"):
        _as(author).update_tweet(987654, "x")


def test_delete_tweet_removes_its_likes(author, session):
    tweet = TweetFactory(owner=author)
    LikeFactory(tweet_id=tweet.id)
    session.commit()
    tweet_id = tweet.id

    _as(author).delete_tweet(tweet_id)

    assert session.get(Tweet, tweet_id) is None
    assert session.query(Like).filter_by(tweet_id=tweet_id).count() == 0


def test_delete_tweet_by_non_owner_forbidden(author, session):
    tweet = TweetFactory(owner=author)
    intruder = AccountFactory()
    session.commit()

    with pytest.raises(ForbiddenError, match="Only the owner can delete their tweet"):
        _as(intruder).delete_tweet(tweet.id)
