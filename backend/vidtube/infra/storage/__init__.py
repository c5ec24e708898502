"""Asset storage adapters and the factory selecting one from config."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from vidtube.services._shared.ports import AssetGateway, InMemoryAssetGateway

from .cloudinary_gateway import CloudinaryAssetGateway


def build_asset_gateway(config: Mapping[str, Any]) -> AssetGateway:
    """
    Build the gateway named by ``ASSET_STORAGE_BACKEND``.

    :param config: Flask config mapping.
    :returns: ``CloudinaryAssetGateway`` or ``InMemoryAssetGateway``.
    :raises RuntimeError: On an unknown backend name.
    """
    backend = str(config.get("ASSET_STORAGE_BACKEND", "cloudinary")).strip().lower()
    if backend == "cloudinary":
        return CloudinaryAssetGateway.from_config(config)
    if backend == "memory":
        return InMemoryAssetGateway()
    raise RuntimeError(f"Unknown ASSET_STORAGE_BACKEND: {backend!r}")


__all__ = ["CloudinaryAssetGateway", "build_asset_gateway"]
