"""DTOs for SubscriptionService."""

from __future__ import annotations

from dataclasses import dataclass

from vidtube.services._shared.dto import VideoOut


@dataclass(frozen=True, slots=True)
class SubscriptionToggleOut:
    subscribed: bool


@dataclass(frozen=True, slots=True)
class SubscriberOut:
    """
    Subscriber of a channel.

    :param subscribed_to_subscriber: Whether the channel subscribes back.
    :type subscribed_to_subscriber: bool
    :param subscribers_count: Subscribers of this subscriber's own channel.
    :type subscribers_count: int
    """

    id: int
    username: str
    full_name: str
    avatar_url: str
    subscribed_to_subscriber: bool
    subscribers_count: int


@dataclass(frozen=True, slots=True)
class SubscribedChannelOut:
    """
    Channel followed by an account.

    :param latest_video: Newest published video, or ``None``.
    :type latest_video: VideoOut | None
    """

    id: int
    username: str
    full_name: str
    avatar_url: str
    latest_video: VideoOut | None
