"""Tweet resource schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate


class TweetContentSchema(Schema):
    """Create/update payload; blank content is rejected by the service."""

    class Meta:
        unknown = EXCLUDE

    content = fields.String(load_default="", validate=validate.Length(max=5000))


class TweetSchema(Schema):
    id = fields.Integer(required=True)
    owner_id = fields.Integer(data_key="owner")
    content = fields.String(required=True)
    created_at = fields.DateTime(data_key="createdAt", allow_none=True)
    updated_at = fields.DateTime(data_key="updatedAt", allow_none=True)


class TweetOwnerSchema(Schema):
    username = fields.String()
    avatar_url = fields.String(data_key="avatarUrl")


class TweetFeedItemSchema(Schema):
    """Tweet in a channel feed with like aggregates for the caller."""

    id = fields.Integer(required=True)
    content = fields.String(required=True)
    owner = fields.Nested(TweetOwnerSchema, data_key="ownerDetails")
    likes_count = fields.Integer(data_key="likesCount")
    is_liked = fields.Boolean(data_key="isLiked")
    created_at = fields.DateTime(data_key="createdAt", allow_none=True)
    updated_at = fields.DateTime(data_key="updatedAt", allow_none=True)
