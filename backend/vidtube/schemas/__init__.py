"""Convenience exports for API schemas."""

from __future__ import annotations

from .account import (
    AccountSchema,
    AccountUpdateSchema,
    ChannelProfileSchema,
    PasswordChangeSchema,
    UsernameChangeSchema,
)
from .auth import (
    LoginResponseSchema,
    LoginSchema,
    RefreshTokenSchema,
    RegisterSchema,
    TokenPairSchema,
)
from .common import AssetRefSchema, OwnerSummarySchema, VideoSchema
from .social import (
    LikeToggleSchema,
    SubscribedChannelSchema,
    SubscriberSchema,
    SubscriptionToggleSchema,
)
from .tweet import TweetContentSchema, TweetFeedItemSchema, TweetSchema

__all__ = [
    "AccountSchema",
    "AccountUpdateSchema",
    "ChannelProfileSchema",
    "PasswordChangeSchema",
    "UsernameChangeSchema",
    "LoginResponseSchema",
    "LoginSchema",
    "RefreshTokenSchema",
    "RegisterSchema",
    "TokenPairSchema",
    "AssetRefSchema",
    "OwnerSummarySchema",
    "VideoSchema",
    "LikeToggleSchema",
    "SubscribedChannelSchema",
    "SubscriberSchema",
    "SubscriptionToggleSchema",
    "TweetContentSchema",
    "TweetFeedItemSchema",
    "TweetSchema",
]
