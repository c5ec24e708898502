"""
vidtube.services._shared.ports
==============================

*Ports* (hexagonal interfaces) the service layer depends on.

Modules
-------
- :mod:`token_provider`:
    :class:`~.TokenProvider` issues and verifies access/refresh tokens.

- :mod:`refresh_token_store`:
    :class:`~.RefreshTokenStore` keeps the single live refresh token of an
    account.

- :mod:`asset_gateway`:
    :class:`~.AssetGateway` uploads media files and deletes them by id.

Concrete adapters (PyJWT, SQL, Cloudinary) live under ``vidtube.infra``; the
in-memory doubles here are used by unit tests.
"""

from __future__ import annotations

from .asset_gateway import AssetGateway, InMemoryAssetGateway, UploadResult
from .refresh_token_store import InMemoryRefreshTokenStore, RefreshTokenStore
from .token_provider import StubTokenProvider, TokenClass, TokenProvider

__all__ = [
    "AssetGateway",
    "InMemoryAssetGateway",
    "UploadResult",
    "RefreshTokenStore",
    "InMemoryRefreshTokenStore",
    "TokenClass",
    "TokenProvider",
    "StubTokenProvider",
]
