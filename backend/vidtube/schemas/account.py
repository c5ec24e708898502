"""Account resource schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate

from .common import AssetRefSchema


class AccountSchema(Schema):
    """Sanitized account: no password hash, no refresh token."""

    id = fields.Integer(required=True)
    username = fields.String(required=True)
    email = fields.String(required=True)
    full_name = fields.String(data_key="fullName")
    avatar = fields.Nested(AssetRefSchema)
    cover_image = fields.Nested(AssetRefSchema, data_key="coverImage")
    created_at = fields.DateTime(data_key="createdAt", allow_none=True)
    updated_at = fields.DateTime(data_key="updatedAt", allow_none=True)


class AccountUpdateSchema(Schema):
    """Profile fields; both optional here, at least one required by the service."""

    class Meta:
        unknown = EXCLUDE

    full_name = fields.String(
        data_key="fullName", load_default=None, allow_none=True, validate=validate.Length(max=100)
    )
    email = fields.Email(load_default=None, allow_none=True, validate=validate.Length(max=254))


class PasswordChangeSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    old_password = fields.String(data_key="oldPassword", required=True)
    new_password = fields.String(
        data_key="newPassword", required=True, validate=validate.Length(max=128)
    )


class UsernameChangeSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    new_username = fields.String(
        data_key="newUsername", load_default="", validate=validate.Length(max=50)
    )


class ChannelProfileSchema(Schema):
    """Channel page with subscription aggregates."""

    id = fields.Integer(required=True)
    username = fields.String(required=True)
    full_name = fields.String(data_key="fullName")
    email = fields.String()
    avatar = fields.Nested(AssetRefSchema)
    cover_image = fields.Nested(AssetRefSchema, data_key="coverImage")
    subscribers_count = fields.Integer(data_key="subscribersCount")
    channels_subscribed_to_count = fields.Integer(data_key="channelsSubscribedToCount")
    is_subscribed = fields.Boolean(data_key="isSubscribed")
