# comments in English; reST docstrings strict
"""Output DTOs shared by several services."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class AssetRef:
    """
    Stored media reference.

    :param public_id: Gateway identifier (empty when absent).
    :type public_id: str
    :param url: Public URL (empty when absent).
    :type url: str
    """

    public_id: str = ""
    url: str = ""


@dataclass(frozen=True, slots=True)
class AccountOut:
    """
    Sanitized account: never carries the password hash or the refresh token.

    :param id: Account id.
    :type id: int
    :param username: Lower-cased handle.
    :type username: str
    :param email: Normalized contact address.
    :type email: str
    :param full_name: Display name.
    :type full_name: str
    :param avatar: Avatar reference.
    :type avatar: AssetRef
    :param cover_image: Cover reference; empty values when absent.
    :type cover_image: AssetRef
    :param created_at: Creation timestamp.
    :type created_at: datetime | None
    :param updated_at: Last update timestamp.
    :type updated_at: datetime | None
    """

    id: int
    username: str
    email: str
    full_name: str
    avatar: AssetRef
    cover_image: AssetRef
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class OwnerSummaryOut:
    """Public card of a channel shown next to its content."""

    id: int
    username: str
    full_name: str
    avatar_url: str


@dataclass(frozen=True, slots=True)
class VideoOut:
    """
    Video listing entry.

    :param owner: Owner card, always loaded with the video.
    :type owner: OwnerSummaryOut
    """

    id: int
    title: str
    description: str
    video_file_url: str
    thumbnail_url: str
    duration: float
    views: int
    is_published: bool
    owner: OwnerSummaryOut
    created_at: datetime | None = None
