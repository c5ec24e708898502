"""Common Marshmallow schemas shared across resources."""

from __future__ import annotations

from marshmallow import Schema, fields


class AssetRefSchema(Schema):
    """Stored media reference."""

    public_id = fields.String(data_key="publicId")
    url = fields.String()


class OwnerSummarySchema(Schema):
    """Public card of a channel shown next to its content."""

    id = fields.Integer(required=True)
    username = fields.String(required=True)
    full_name = fields.String(data_key="fullName")
    avatar = fields.String(attribute="avatar_url")


class VideoSchema(Schema):
    """Video listing entry with its owner card."""

    id = fields.Integer(required=True)
    title = fields.String(required=True)
    description = fields.String()
    video_file_url = fields.String(data_key="videoFile")
    thumbnail_url = fields.String(data_key="thumbnail")
    duration = fields.Float()
    views = fields.Integer()
    is_published = fields.Boolean(data_key="isPublished")
    owner = fields.Nested(OwnerSummarySchema)
    created_at = fields.DateTime(data_key="createdAt", allow_none=True)
