"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate

from .account import AccountSchema


class RegisterSchema(Schema):
    """Multipart text fields of the registration form.

    Blank values are accepted here; the registration service rejects them
    with its own messages.
    """

    class Meta:
        unknown = EXCLUDE

    full_name = fields.String(data_key="fullName", load_default="")
    email = fields.String(load_default="", validate=validate.Length(max=254))
    username = fields.String(load_default="", validate=validate.Length(max=50))
    password = fields.String(load_default="", validate=validate.Length(max=128))


class LoginSchema(Schema):
    """Input payload for authenticating with a username or an email."""

    class Meta:
        unknown = EXCLUDE

    username = fields.String(load_default=None, allow_none=True)
    email = fields.String(load_default=None, allow_none=True)
    password = fields.String(required=True, validate=validate.Length(max=128))


class RefreshTokenSchema(Schema):
    """Optional body carrying the refresh token when no cookie is sent."""

    class Meta:
        unknown = EXCLUDE

    refresh_token = fields.String(data_key="refreshToken", load_default=None, allow_none=True)


class TokenPairSchema(Schema):
    """Response payload containing both tokens."""

    access_token = fields.String(data_key="accessToken", required=True)
    refresh_token = fields.String(data_key="refreshToken", required=True)


class LoginResponseSchema(Schema):
    """Response payload of a successful login."""

    user = fields.Nested(AccountSchema, attribute="account")
    access_token = fields.String(data_key="accessToken", attribute="tokens.access_token")
    refresh_token = fields.String(data_key="refreshToken", attribute="tokens.refresh_token")
