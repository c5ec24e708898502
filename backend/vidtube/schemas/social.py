"""Like and subscription schemas."""

from __future__ import annotations

from marshmallow import Schema, fields

from .common import VideoSchema


class LikeToggleSchema(Schema):
    is_liked = fields.Boolean(data_key="isLiked")


class SubscriptionToggleSchema(Schema):
    subscribed = fields.Boolean()


class SubscriberSchema(Schema):
    id = fields.Integer(required=True)
    username = fields.String()
    full_name = fields.String(data_key="fullName")
    avatar = fields.String(attribute="avatar_url")
    subscribed_to_subscriber = fields.Boolean(data_key="subscribedToSubscriber")
    subscribers_count = fields.Integer(data_key="subscribersCount")


class SubscribedChannelSchema(Schema):
    id = fields.Integer(required=True)
    username = fields.String()
    full_name = fields.String(data_key="fullName")
    avatar = fields.String(attribute="avatar_url")
    latest_video = fields.Nested(VideoSchema, data_key="latestVideo", allow_none=True)
