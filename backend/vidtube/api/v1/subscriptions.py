"""Channel subscription endpoints."""

from __future__ import annotations

from flask import Blueprint

from vidtube.api.deps import api_response, require_auth, timing
from vidtube.schemas import SubscribedChannelSchema, SubscriberSchema, SubscriptionToggleSchema
from vidtube.services.auth import AuthContext
from vidtube.services.subscriptions import SubscriptionService

bp = Blueprint("subscriptions", __name__)

toggle_schema = SubscriptionToggleSchema()
subscribers_schema = SubscriberSchema(many=True)
channels_schema = SubscribedChannelSchema(many=True)


@bp.post("/c/<int:channel_id>")
@require_auth
@timing
def toggle_subscription(channel_id: int, auth: AuthContext):
    result = SubscriptionService(ctx=auth.ctx).toggle_subscription(channel_id)
    message = "Subscribed successfully" if result.subscribed else "Unsubscribed successfully"
    return api_response(toggle_schema.dump(result), message)


@bp.get("/c/<int:channel_id>")
@require_auth
@timing
def channel_subscribers(channel_id: int, auth: AuthContext):
    subscribers = SubscriptionService(ctx=auth.ctx).list_channel_subscribers(channel_id)
    return api_response(subscribers_schema.dump(subscribers), "Subscribers fetched successfully")


@bp.get("/u/<int:subscriber_id>")
@require_auth
@timing
def subscribed_channels(subscriber_id: int, auth: AuthContext):
    """List the channels ``subscriber_id`` follows with each one's latest video."""

    channels = SubscriptionService(ctx=auth.ctx).list_subscribed_channels(subscriber_id)
    return api_response(channels_schema.dump(channels), "Subscribed channels fetched successfully")
