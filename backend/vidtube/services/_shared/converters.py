"""ORM to DTO mapping shared across services."""

from __future__ import annotations

from vidtube.models.account import Account
from vidtube.models.video import Video
from vidtube.services._shared.dto import AccountOut, AssetRef, OwnerSummaryOut, VideoOut


def to_account_out(account: Account) -> AccountOut:
    """Map an :class:`Account` to its sanitized DTO (no credential fields read)."""
    return AccountOut(
        id=account.id,
        username=account.username,
        email=account.email,
        full_name=account.full_name,
        avatar=AssetRef(public_id=account.avatar_public_id or "", url=account.avatar_url or ""),
        cover_image=AssetRef(
            public_id=account.cover_image_public_id or "",
            url=account.cover_image_url or "",
        ),
        created_at=account.created_at,
        updated_at=account.updated_at,
    )


def to_owner_summary(account: Account) -> OwnerSummaryOut:
    return OwnerSummaryOut(
        id=account.id,
        username=account.username,
        full_name=account.full_name,
        avatar_url=account.avatar_url or "",
    )


def to_video_out(video: Video) -> VideoOut:
    return VideoOut(
        id=video.id,
        title=video.title,
        description=video.description,
        video_file_url=video.video_file_url,
        thumbnail_url=video.thumbnail_url,
        duration=float(video.duration or 0.0),
        views=int(video.views or 0),
        is_published=bool(video.is_published),
        owner=to_owner_summary(video.owner),
        created_at=video.created_at,
    )
