"""Cloudinary adapter for the asset gateway, built on the official SDK."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from contextlib import suppress
from dataclasses import dataclass
from typing import Any

import cloudinary
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError

from vidtube.services._shared.errors import UploadError
from vidtube.services._shared.ports import AssetGateway, UploadResult

log = logging.getLogger(__name__)


@dataclass(slots=True)
class CloudinaryAssetGateway(AssetGateway):
    """
    Upload/destroy assets on Cloudinary.

    Uploads use ``resource_type=auto`` so images and videos share one
    endpoint; deletions target images (avatars and cover images).

    :param cloud_name: Cloudinary cloud name.
    :param api_key: API key.
    :param api_secret: API secret used for signatures.
    :param timeout: Per-request timeout in seconds.
    """

    cloud_name: str
    api_key: str
    api_secret: str
    timeout: float = 30

    def __post_init__(self) -> None:
        cloudinary.config(
            cloud_name=self.cloud_name,
            api_key=self.api_key,
            api_secret=self.api_secret,
            secure=True,
        )

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> CloudinaryAssetGateway:
        missing = [
            key
            for key in ("CLOUDINARY_CLOUD_NAME", "CLOUDINARY_API_KEY", "CLOUDINARY_API_SECRET")
            if not config.get(key)
        ]
        if missing:
            raise RuntimeError(f"Cloudinary storage selected but not configured: {missing}")
        return cls(
            cloud_name=config["CLOUDINARY_CLOUD_NAME"],
            api_key=config["CLOUDINARY_API_KEY"],
            api_secret=config["CLOUDINARY_API_SECRET"],
            timeout=float(config.get("CLOUDINARY_TIMEOUT", 30)),
        )

    # ------------------------------------------------------------------ #

    def upload(self, local_path: str) -> UploadResult:
        """
        Upload ``local_path`` and remove it from disk.

        :raises UploadError: On missing file, SDK failure or a response
            without ``public_id``/``secure_url``.
        """
        if not local_path or not os.path.isfile(local_path):
            raise UploadError("File to upload is missing")
        try:
            body = cloudinary.uploader.upload(
                local_path, resource_type="auto", timeout=self.timeout
            )
        except CloudinaryError as exc:
            log.error("Cloudinary upload failed: %s", exc)
            raise UploadError("Failed to upload file") from exc
        finally:
            with suppress(FileNotFoundError):
                os.remove(local_path)

        public_id = body.get("public_id")
        url = body.get("secure_url") or body.get("url")
        if not public_id or not url:
            log.error("Cloudinary upload returned no asset reference: %s", body)
            raise UploadError("Failed to upload file")
        return UploadResult(public_id=public_id, url=url)

    def delete(self, public_id: str) -> bool:
        """
        Destroy an image by id.

        :returns: ``True`` when Cloudinary reports ``result == "ok"``.
        :raises UploadError: On SDK failure.
        """
        try:
            body = cloudinary.uploader.destroy(
                public_id, resource_type="image", timeout=self.timeout
            )
        except CloudinaryError as exc:
            log.error("Cloudinary delete failed for %s: %s", public_id, exc)
            raise UploadError("Failed to delete file") from exc
        return body.get("result") == "ok"
