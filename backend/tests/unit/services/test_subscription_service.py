"""Unit tests for SubscriptionService."""

from __future__ import annotations

import pytest

from tests.factories.account import AccountFactory
from tests.factories.social import SubscriptionFactory
from tests.factories.video import VideoFactory
from vidtube.services._shared.base import ServiceContext
from vidtube.services._shared.errors import NotFoundError, ValidationError
from vidtube.services.subscriptions import SubscriptionService


def _as(account) -> SubscriptionService:
    return SubscriptionService(ctx=ServiceContext(actor_id=account.id))


def test_toggle_subscription_round_trip(session):
    me, channel = AccountFactory(), AccountFactory()
    session.commit()

    assert _as(me).toggle_subscription(channel.id).subscribed is True
    assert _as(me).toggle_subscription(channel.id).subscribed is False


def test_cannot_subscribe_to_self(session):
    me = AccountFactory()
    session.commit()

    with pytest.raises(ValidationError, match="You cannot subscribe to your own channel"):
        _as(me).toggle_subscription(me.id)


def test_toggle_unknown_channel(session):
    me = AccountFactory()
    session.commit()

    with pytest.raises(NotFoundError, match="Channel does not exist"):
        _as(me).toggle_subscription(987654)


def test_list_channel_subscribers(session):
    channel, fan, mutual = AccountFactory(), AccountFactory(), AccountFactory()
    SubscriptionFactory(subscriber_id=fan.id, channel_id=channel.id)
    SubscriptionFactory(subscriber_id=mutual.id, channel_id=channel.id)
    SubscriptionFactory(subscriber_id=channel.id, channel_id=mutual.id)
    session.commit()

    subscribers = {s.id: s for s in _as(fan).list_channel_subscribers(channel.id)}

    assert set(subscribers) == {fan.id, mutual.id}
    assert subscribers[mutual.id].subscribed_to_subscriber is True
    assert subscribers[mutual.id].subscribers_count == 1
    assert subscribers[fan.id].subscribed_to_subscriber is False
    assert subscribers[fan.id].subscribers_count == 0


def test_list_channel_subscribers_unknown_channel(session):
    me = AccountFactory()
    session.commit()

    with pytest.raises(NotFoundError):
        _as(me).list_channel_subscribers(987654)


def test_list_subscribed_channels_with_latest_published_video(session):
    me, busy, quiet = AccountFactory(), AccountFactory(), AccountFactory()
    VideoFactory(owner=busy, title="old")
    latest = VideoFactory(owner=busy, title="new")
    VideoFactory(owner=busy, title="draft", is_published=False)
    SubscriptionFactory(subscriber_id=me.id, channel_id=busy.id)
    SubscriptionFactory(subscriber_id=me.id, channel_id=quiet.id)
    session.commit()

    channels = {c.id: c for c in _as(me).list_subscribed_channels(me.id)}

    assert channels[busy.id].latest_video.id == latest.id
    assert channels[quiet.id].latest_video is None


def test_list_subscribed_channels_unknown_user(session):
    me = AccountFactory()
    session.commit()

    with pytest.raises(NotFoundError, match="User not found"):
        _as(me).list_subscribed_channels(987654)
