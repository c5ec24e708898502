"""Repository package exposing persistence-layer access for all domain models."""

from __future__ import annotations

from vidtube.repositories.account import AccountRepository
from vidtube.repositories.base import BaseRepository
from vidtube.repositories.like import LikeRepository
from vidtube.repositories.subscription import SubscriptionRepository
from vidtube.repositories.tweet import TweetRepository
from vidtube.repositories.video import CommentRepository, VideoRepository

__all__ = [
    "BaseRepository",
    "AccountRepository",
    "CommentRepository",
    "LikeRepository",
    "SubscriptionRepository",
    "TweetRepository",
    "VideoRepository",
]
