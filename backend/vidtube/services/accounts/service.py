"""
AccountService
==============

Profile operations of the authenticated caller: details, password, username,
avatar/cover replacement, plus the channel page and the watch history.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from vidtube.models.account import Account
from vidtube.repositories.account import AccountRepository
from vidtube.services._shared.base import BaseService, ServiceContext
from vidtube.services._shared.converters import to_account_out, to_video_out
from vidtube.services._shared.dto import AccountOut, AssetRef, VideoOut
from vidtube.services._shared.errors import (
    ConflictError,
    NotFoundError,
    UploadError,
    ValidationError,
)
from vidtube.services._shared.ports import AssetGateway
from vidtube.services.accounts.dto import (
    AccountDetailsIn,
    ChannelProfileOut,
    PasswordChangeIn,
)

logger = logging.getLogger(__name__)

# image kind -> (model field prefix, human label)
IMAGE_KINDS = {
    "avatar": ("avatar", "Avatar"),
    "cover_image": ("cover_image", "Cover image"),
}


class AccountService(BaseService):
    """Operations on the caller's own account and on public channel pages."""

    def __init__(
        self, *, assets: AssetGateway | None = None, ctx: ServiceContext | None = None
    ) -> None:
        """
        :param assets: Gateway used by avatar/cover replacement.
        :param ctx: Request-scoped context; ``actor_id`` is the caller.
        """
        super().__init__(ctx=ctx)
        self.assets = assets

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #

    def get_current_account(self) -> AccountOut:
        actor_id = self.require_actor()
        with self.ro_uow() as uow:
            account = uow.accounts.get_sanitized(actor_id)
            if account is None:
                raise NotFoundError("Account", actor_id, detail="User not found")
            return to_account_out(account)

    def get_channel_profile(self, username: str) -> ChannelProfileOut:
        """
        Return a channel page with subscription aggregates.

        :param username: Channel handle (case-insensitive).
        :raises ValidationError: Blank username.
        :raises NotFoundError: Unknown channel.
        """
        if not (username or "").strip():
            raise ValidationError("Username is missing")
        actor_id = self.require_actor()

        with self.ro_uow() as uow:
            channel = uow.accounts.get_by_username(username)
            if channel is None:
                raise NotFoundError("Channel", username, detail="Channel does not exist")
            subs = uow.subscriptions
            return ChannelProfileOut(
                id=channel.id,
                username=channel.username,
                full_name=channel.full_name,
                email=channel.email,
                avatar=AssetRef(public_id=channel.avatar_public_id, url=channel.avatar_url),
                cover_image=AssetRef(
                    public_id=channel.cover_image_public_id, url=channel.cover_image_url
                ),
                subscribers_count=subs.count_subscribers(channel.id),
                channels_subscribed_to_count=subs.count_subscriptions(channel.id),
                is_subscribed=subs.find_pair(actor_id, channel.id) is not None,
            )

    def get_watch_history(self) -> list[VideoOut]:
        actor_id = self.require_actor()
        with self.ro_uow() as uow:
            return [to_video_out(v) for v in uow.videos.watched_by(actor_id)]

    # ------------------------------------------------------------------ #
    # Commands
    # ------------------------------------------------------------------ #

    def update_account_details(self, dto: AccountDetailsIn) -> AccountOut:
        """
        Update display name and/or email.

        :raises ValidationError: Neither field supplied.
        :raises ConflictError: Email used by another account.
        """
        updates: dict[str, str] = {}
        if dto.full_name and dto.full_name.strip():
            updates["full_name"] = dto.full_name.strip()
        if dto.email and dto.email.strip():
            updates["email"] = dto.email.strip().lower()
        if not updates:
            raise ValidationError("All fields are required")

        actor_id = self.require_actor()
        try:
            with self.rw_uow() as uow:
                repo = uow.accounts
                account = self._get_account(repo, actor_id)
                if "email" in updates:
                    owner = repo.get_by_email(updates["email"])
                    if owner is not None and owner.id != actor_id:
                        raise ConflictError("Account", "Email already in use")
                self._assign(repo, account, updates)
                return to_account_out(account)
        except IntegrityError as exc:
            raise ConflictError("Account", "Email already in use") from exc

    def change_password(self, dto: PasswordChangeIn) -> None:
        """
        Replace the caller's password after checking the current one.

        :raises ValidationError: Wrong old password or new password too short.
        """
        actor_id = self.require_actor()
        with self.rw_uow() as uow:
            repo = uow.accounts
            account = self._get_account(repo, actor_id)
            if not account.verify_password(dto.old_password):
                raise ValidationError("Invalid old password")
            self.ensure_password_policy(dto.new_password)
            repo.update_password(account, dto.new_password)
        logger.info("Password changed", extra={"account_id": actor_id})

    def change_username(self, new_username: str) -> AccountOut:
        """
        Change the caller's handle.

        :raises ValidationError: Blank username.
        :raises ConflictError: Handle taken by another account.
        """
        normalized = (new_username or "").strip().lower()
        if not normalized:
            raise ValidationError("New username is required")

        actor_id = self.require_actor()
        try:
            with self.rw_uow() as uow:
                repo = uow.accounts
                taken = repo.get_by_username(normalized)
                if taken is not None and taken.id != actor_id:
                    raise ConflictError("Account", "Username already taken")
                account = self._get_account(repo, actor_id)
                self._assign(repo, account, {"username": normalized})
                return to_account_out(account)
        except IntegrityError as exc:
            raise ConflictError("Account", "Username already taken") from exc

    def update_avatar(self, local_path: str | None) -> AccountOut:
        return self._replace_image("avatar", local_path)

    def update_cover_image(self, local_path: str | None) -> AccountOut:
        return self._replace_image("cover_image", local_path)

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    def _replace_image(self, kind: str, local_path: str | None) -> AccountOut:
        """
        Upload a new image, persist its reference, then delete the old asset.

        The old asset is removed only after the new reference is committed; a
        failed deletion is logged and does not fail the request.
        """
        prefix, label = IMAGE_KINDS[kind]
        if not local_path:
            raise ValidationError(f"{label} file is missing")
        if self.assets is None:
            raise RuntimeError("AccountService needs an asset gateway to replace images.")
        actor_id = self.require_actor()

        try:
            uploaded = self.assets.upload(local_path)
        except UploadError as exc:
            raise UploadError(f"Failed to upload {label.lower()}") from exc

        with self.rw_uow() as uow:
            repo = uow.accounts
            account = self._get_account(repo, actor_id)
            old_public_id = getattr(account, f"{prefix}_public_id")
            repo.update(
                account,
                **{f"{prefix}_public_id": uploaded.public_id, f"{prefix}_url": uploaded.url},
            )
            out = to_account_out(account)

        if old_public_id and old_public_id != uploaded.public_id:
            try:
                self.assets.delete(old_public_id)
            except UploadError as exc:
                logger.warning("Could not delete replaced %s %s: %s", kind, old_public_id, exc)
        return out

    @staticmethod
    def _get_account(repo: AccountRepository, account_id: int) -> Account:
        account = repo.get(account_id)
        if account is None:
            raise NotFoundError("Account", account_id, detail="User not found")
        return account

    @staticmethod
    def _assign(repo: AccountRepository, account: Account, updates: dict[str, str]) -> None:
        try:
            repo.update(account, **updates)
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc
