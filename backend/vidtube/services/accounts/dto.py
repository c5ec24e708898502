"""
DTOs for AccountService.

Data Transfer Objects isolate the service layer from ORM models.
"""

from __future__ import annotations

from dataclasses import dataclass

from vidtube.services._shared.dto import AssetRef

# --------------------------------------------------------------------------- #
# Input DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class AccountDetailsIn:
    """
    Input DTO for updating profile fields; at least one must be given.

    :param full_name: New display name.
    :type full_name: str | None
    :param email: New contact address.
    :type email: str | None
    """

    full_name: str | None = None
    email: str | None = None


@dataclass(frozen=True, slots=True)
class PasswordChangeIn:
    """
    Input DTO for changing the caller's password.

    :param old_password: Current password.
    :type old_password: str
    :param new_password: Replacement password.
    :type new_password: str
    """

    old_password: str
    new_password: str


# --------------------------------------------------------------------------- #
# Output DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class ChannelProfileOut:
    """
    Public channel page of an account, as seen by the caller.

    :param subscribers_count: Accounts subscribed to this channel.
    :type subscribers_count: int
    :param channels_subscribed_to_count: Channels this account subscribes to.
    :type channels_subscribed_to_count: int
    :param is_subscribed: Whether the caller subscribes to this channel.
    :type is_subscribed: bool
    """

    id: int
    username: str
    full_name: str
    email: str
    avatar: AssetRef
    cover_image: AssetRef
    subscribers_count: int
    channels_subscribed_to_count: int
    is_subscribed: bool
