"""
RegistrationService
===================

Process-level service that registers a new account:

- Validates the text fields and the password floor.
- Rejects a taken username or email before touching storage.
- Uploads the required avatar and the optional cover image.
- Persists the account (hashing the password once) and returns it sanitized.

Uploaded assets are not rolled back when a later step fails.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from vidtube.models.account import Account
from vidtube.services._shared.base import BaseService, ServiceContext
from vidtube.services._shared.converters import to_account_out
from vidtube.services._shared.dto import AccountOut
from vidtube.services._shared.errors import (
    ConflictError,
    InternalError,
    UploadError,
    ValidationError,
)
from vidtube.services._shared.ports import AssetGateway, UploadResult
from vidtube.services.registration.dto import RegistrationIn

logger = logging.getLogger(__name__)

EMAIL_MIN_LENGTH = 5
DUPLICATE_MESSAGE = "User already exists with this email or username"


class RegistrationService(BaseService):
    """Orchestrates the account registration process."""

    def __init__(self, *, assets: AssetGateway, ctx: ServiceContext | None = None) -> None:
        super().__init__(ctx=ctx)
        self.assets = assets

    def register(self, dto: RegistrationIn) -> AccountOut:
        """
        Register an account.

        :param dto: Registration input.
        :type dto: :class:`RegistrationIn`
        :returns: Sanitized account.
        :rtype: :class:`AccountOut`
        :raises ValidationError: Blank field, bad email, short password or
            missing avatar.
        :raises ConflictError: Username or email already registered.
        :raises UploadError: Avatar upload failed.
        :raises InternalError: Account missing right after creation.
        """
        fields = (dto.full_name, dto.email, dto.username, dto.password)
        if any(not (value or "").strip() for value in fields):
            raise ValidationError("All fields are required")

        email = dto.email.strip().lower()
        if len(email) < EMAIL_MIN_LENGTH or "@" not in email:
            raise ValidationError("Invalid email address")

        self.ensure_password_policy(dto.password)

        username = dto.username.strip().lower()
        with self.ro_uow() as uow:
            if uow.accounts.exists_by_username_or_email(username=username, email=email):
                raise ConflictError("Account", DUPLICATE_MESSAGE)

        if not dto.avatar_path:
            raise ValidationError("Avatar image is required")

        avatar = self._upload_avatar(dto.avatar_path)
        cover = self._upload_cover(dto.cover_image_path)

        try:
            with self.rw_uow() as uow:
                account = Account(
                    full_name=dto.full_name.strip(),
                    email=email,
                    username=username,
                    avatar_public_id=avatar.public_id,
                    avatar_url=avatar.url,
                    cover_image_public_id=cover.public_id if cover else "",
                    cover_image_url=cover.url if cover else "",
                )
                account.password = dto.password
                uow.accounts.add(account)
                account_id = account.id
        except IntegrityError as exc:
            logger.info("Registration lost a uniqueness race: %s", exc.orig)
            raise ConflictError("Account", DUPLICATE_MESSAGE) from exc

        with self.ro_uow() as uow:
            created = uow.accounts.get_sanitized(account_id)
            if created is None:
                raise InternalError("Something went wrong while registering the user")
            logger.info("Account registered", extra={"account_id": account_id})
            return to_account_out(created)

    # ------------------------------------------------------------------ #
    # Uploads
    # ------------------------------------------------------------------ #

    def _upload_avatar(self, path: str) -> UploadResult:
        try:
            return self.assets.upload(path)
        except UploadError as exc:
            raise UploadError("Failed to upload avatar image") from exc

    def _upload_cover(self, path: str | None) -> UploadResult | None:
        """Upload the optional cover; a failure leaves the cover empty."""
        if not path:
            return None
        try:
            return self.assets.upload(path)
        except UploadError as exc:
            logger.warning("Cover image upload failed, continuing without it: %s", exc)
            return None
