"""Subscription repository: follow edges and their aggregates."""

from __future__ import annotations

from typing import cast

from sqlalchemy import func, select
from sqlalchemy.orm import aliased

from vidtube.models.account import Account
from vidtube.models.subscription import Subscription
from vidtube.repositories.base import BaseRepository


class SubscriptionRepository(BaseRepository[Subscription]):
    """Persistence-only repository for :class:`Subscription`."""

    model = Subscription

    def find_pair(self, subscriber_id: int, channel_id: int) -> Subscription | None:
        """Return the edge ``subscriber -> channel`` when present."""
        stmt = select(Subscription).where(
            Subscription.subscriber_id == subscriber_id,
            Subscription.channel_id == channel_id,
        )
        return cast(Subscription | None, self.session.execute(stmt).scalars().first())

    def count_subscribers(self, channel_id: int) -> int:
        stmt = select(func.count(Subscription.id)).where(Subscription.channel_id == channel_id)
        return int(self.session.execute(stmt).scalar_one())

    def count_subscriptions(self, subscriber_id: int) -> int:
        stmt = select(func.count(Subscription.id)).where(
            Subscription.subscriber_id == subscriber_id
        )
        return int(self.session.execute(stmt).scalar_one())

    def subscribers_of(self, channel_id: int) -> list[tuple[Account, bool, int]]:
        """List a channel's subscribers, newest first.

        :param channel_id: Channel account id.
        :type channel_id: int
        :returns: ``(subscriber, channel_follows_back, subscriber_subscribers_count)``.
        :rtype: list[tuple[Account, bool, int]]
        """
        back = aliased(Subscription)
        counted = aliased(Subscription)
        follows_back = (
            select(back.id)
            .where(back.subscriber_id == channel_id, back.channel_id == Account.id)
            .correlate(Account)
            .exists()
        )
        subscribers_count = (
            select(func.count(counted.id))
            .where(counted.channel_id == Account.id)
            .correlate(Account)
            .scalar_subquery()
        )
        stmt = (
            select(Account, follows_back.label("follows_back"), subscribers_count.label("count"))
            .join(Subscription, Subscription.subscriber_id == Account.id)
            .where(Subscription.channel_id == channel_id)
            .order_by(Subscription.created_at.desc(), Subscription.id.desc())
        )
        rows = self.session.execute(stmt).all()
        return [(account, bool(flag), int(count or 0)) for account, flag, count in rows]

    def channels_of(self, subscriber_id: int) -> list[Account]:
        """List the channels an account subscribes to, newest subscription first."""
        stmt = (
            select(Account)
            .join(Subscription, Subscription.channel_id == Account.id)
            .where(Subscription.subscriber_id == subscriber_id)
            .order_by(Subscription.created_at.desc(), Subscription.id.desc())
        )
        return list(self.session.execute(stmt).scalars().all())
