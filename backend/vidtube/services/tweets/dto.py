"""DTOs for TweetService."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class TweetOut:
    """
    Tweet as returned by create/update.

    :param id: Tweet id.
    :type id: int
    :param owner_id: Author account id.
    :type owner_id: int
    :param content: Trimmed text.
    :type content: str
    """

    id: int
    owner_id: int
    content: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class TweetOwnerOut:
    username: str
    avatar_url: str


@dataclass(frozen=True, slots=True)
class TweetFeedItemOut:
    """
    Entry of a channel's tweet list, seen by the caller.

    :param likes_count: Number of likes on the tweet.
    :type likes_count: int
    :param is_liked: Whether the caller liked it.
    :type is_liked: bool
    """

    id: int
    content: str
    owner: TweetOwnerOut
    likes_count: int
    is_liked: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None
