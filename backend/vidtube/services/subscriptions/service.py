"""SubscriptionService: follow/unfollow channels and list both sides of the edge."""

from __future__ import annotations

import logging

from vidtube.models.subscription import Subscription
from vidtube.services._shared.base import BaseService
from vidtube.services._shared.converters import to_video_out
from vidtube.services._shared.errors import NotFoundError, ValidationError
from vidtube.services.subscriptions.dto import (
    SubscribedChannelOut,
    SubscriberOut,
    SubscriptionToggleOut,
)

logger = logging.getLogger(__name__)


class SubscriptionService(BaseService):
    """Subscriptions between accounts; an account never subscribes to itself."""

    def toggle_subscription(self, channel_id: int) -> SubscriptionToggleOut:
        """
        Subscribe the caller to a channel, or unsubscribe when already subscribed.

        :raises ValidationError: Channel is the caller.
        :raises NotFoundError: Unknown channel.
        """
        actor_id = self.require_actor()
        if int(channel_id) == int(actor_id):
            raise ValidationError("You cannot subscribe to your own channel")

        with self.rw_uow() as uow:
            if uow.accounts.get(channel_id) is None:
                raise NotFoundError("Channel", channel_id, detail="Channel does not exist")
            existing = uow.subscriptions.find_pair(actor_id, channel_id)
            if existing is not None:
                uow.subscriptions.delete(existing)
                subscribed = False
            else:
                uow.subscriptions.add(Subscription(subscriber_id=actor_id, channel_id=channel_id))
                subscribed = True
        logger.info(
            "Subscription toggled",
            extra={
                "account_id": actor_id,
                "status": "subscribed" if subscribed else "unsubscribed",
            },
        )
        return SubscriptionToggleOut(subscribed=subscribed)

    def list_channel_subscribers(self, channel_id: int) -> list[SubscriberOut]:
        """
        List the subscribers of a channel, newest first.

        :raises NotFoundError: Unknown channel.
        """
        with self.ro_uow() as uow:
            if not uow.accounts.exists(id=channel_id):
                raise NotFoundError("Channel", channel_id, detail="Channel does not exist")
            return [
                SubscriberOut(
                    id=account.id,
                    username=account.username,
                    full_name=account.full_name,
                    avatar_url=account.avatar_url,
                    subscribed_to_subscriber=follows_back,
                    subscribers_count=count,
                )
                for account, follows_back, count in uow.subscriptions.subscribers_of(channel_id)
            ]

    def list_subscribed_channels(self, subscriber_id: int) -> list[SubscribedChannelOut]:
        """
        List the channels an account follows, each with its latest video.

        :raises NotFoundError: Unknown subscriber.
        """
        with self.ro_uow() as uow:
            if not uow.accounts.exists(id=subscriber_id):
                raise NotFoundError("Account", subscriber_id, detail="User not found")
            out: list[SubscribedChannelOut] = []
            for channel in uow.subscriptions.channels_of(subscriber_id):
                latest = uow.videos.latest_published_for(channel.id)
                out.append(
                    SubscribedChannelOut(
                        id=channel.id,
                        username=channel.username,
                        full_name=channel.full_name,
                        avatar_url=channel.avatar_url,
                        latest_video=to_video_out(latest) if latest is not None else None,
                    )
                )
            return out
