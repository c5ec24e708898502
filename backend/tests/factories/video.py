"""Factories for videos, comments and watch history entries."""

from __future__ import annotations

import factory

from tests.factories import BaseFactory
from tests.factories.account import AccountFactory
from vidtube.models.video import Comment, Video, WatchHistoryEntry


class VideoFactory(BaseFactory):
    class Meta:
        model = Video

    owner = factory.SubFactory(AccountFactory)
    title = factory.Sequence(lambda n: f"Video {n}")
    description = factory.Faker("sentence")
    video_file_url = factory.Sequence(lambda n: f"memory://assets/video-{n}.mp4")
    thumbnail_url = factory.Sequence(lambda n: f"memory://assets/thumb-{n}.png")
    duration = 42.5
    views = 0
    is_published = True


class CommentFactory(BaseFactory):
    class Meta:
        model = Comment

    video_id = factory.LazyFunction(lambda: VideoFactory().id)
    owner_id = factory.LazyFunction(lambda: AccountFactory().id)
    content = factory.Faker("sentence")


class WatchHistoryEntryFactory(BaseFactory):
    """History row; pass ``account_id`` and ``video`` explicitly."""

    class Meta:
        model = WatchHistoryEntry

    account_id = factory.LazyFunction(lambda: AccountFactory().id)
    video = factory.SubFactory(VideoFactory)
