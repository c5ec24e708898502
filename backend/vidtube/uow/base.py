"""
Abstract Unit of Work contracts.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from vidtube.repositories import (
        AccountRepository,
        CommentRepository,
        LikeRepository,
        SubscriptionRepository,
        TweetRepository,
        VideoRepository,
    )


class SupportsCommit(Protocol):
    def commit(self) -> None: ...
    def rollback(self) -> None: ...


class UnitOfWork(ABC):
    """
    Transactional boundary for one service call.

    Responsibilities:
    - Expose repositories bound to the same session and transaction.
    - Commit on success, roll back on error.
    """

    accounts: AccountRepository
    videos: VideoRepository
    comments: CommentRepository
    tweets: TweetRepository
    likes: LikeRepository
    subscriptions: SubscriptionRepository

    @abstractmethod
    def __enter__(self) -> UnitOfWork: ...
    @abstractmethod
    def __exit__(self, exc_type, exc, tb) -> None: ...
    @abstractmethod
    def commit(self) -> None: ...
    @abstractmethod
    def rollback(self) -> None: ...
