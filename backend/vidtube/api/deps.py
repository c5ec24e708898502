"""Shared API helpers for request parsing and cross-cutting concerns."""

from __future__ import annotations

import functools
import os
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager, suppress
from typing import Any, TypeVar
from uuid import uuid4

from flask import Response, current_app, jsonify, request
from werkzeug.utils import secure_filename

from vidtube.core.extensions import get_asset_gateway
from vidtube.core.logger import ensure_request_id
from vidtube.infra.db import SQLRefreshTokenStore
from vidtube.infra.jwt import JWTTokenProvider
from vidtube.services._shared.base import ServiceContext
from vidtube.services._shared.ports import AssetGateway
from vidtube.services.auth import AuthContext, AuthService, TokenPairOut

F = TypeVar("F", bound=Callable[..., Any])

ACCESS_COOKIE = "accessToken"
REFRESH_COOKIE = "refreshToken"


# --------------------------------------------------------------------------- #
# Responses
# --------------------------------------------------------------------------- #


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def api_response(data: Any, message: str = "Success", *, status: int = 200) -> Response:
    """Wrap ``data`` in the success envelope ``{statusCode, data, message, success}``."""

    return json_response(
        {"statusCode": status, "data": data, "message": message, "success": True},
        status=status,
    )


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]


# --------------------------------------------------------------------------- #
# Service wiring
# --------------------------------------------------------------------------- #


def get_token_provider() -> JWTTokenProvider:
    return JWTTokenProvider.from_config(current_app.config)


def build_auth_service(ctx: ServiceContext | None = None) -> AuthService:
    """Build an :class:`AuthService` wired to PyJWT and the accounts table."""

    return AuthService(
        token_provider=get_token_provider(),
        refresh_store=SQLRefreshTokenStore(),
        ctx=ctx or ServiceContext(request_id=ensure_request_id()),
    )


def assets() -> AssetGateway:
    return get_asset_gateway()


# --------------------------------------------------------------------------- #
# Auth guard
# --------------------------------------------------------------------------- #


def extract_access_token() -> str | None:
    """Return the access token from the cookie, else from ``Authorization: Bearer``."""

    token = request.cookies.get(ACCESS_COOKIE)
    if token:
        return token
    header = request.headers.get("Authorization", "")
    scheme, _, value = header.partition(" ")
    if scheme.lower() == "bearer" and value.strip():
        return value.strip()
    return None


def require_auth(func: F) -> F:
    """Authenticate the caller and pass it to the view as ``auth=AuthContext``."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        account = build_auth_service().authenticate_access(extract_access_token())
        ctx = ServiceContext(actor_id=account.id, request_id=ensure_request_id())
        kwargs["auth"] = AuthContext(account=account, ctx=ctx)
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


# --------------------------------------------------------------------------- #
# Cookies
# --------------------------------------------------------------------------- #


def _cookie_options() -> dict[str, Any]:
    cfg = current_app.config
    return {
        "httponly": True,
        "secure": bool(cfg.get("AUTH_COOKIE_SECURE", True)),
        "samesite": cfg.get("AUTH_COOKIE_SAMESITE", "None"),
    }


def set_auth_cookies(response: Response, tokens: TokenPairOut) -> Response:
    """Attach both tokens as HttpOnly cookies with one SameSite policy."""

    cfg = current_app.config
    options = _cookie_options()
    response.set_cookie(
        ACCESS_COOKIE,
        tokens.access_token,
        max_age=int(cfg["ACCESS_TOKEN_EXPIRES"]),
        **options,
    )
    response.set_cookie(
        REFRESH_COOKIE,
        tokens.refresh_token,
        max_age=int(cfg["REFRESH_TOKEN_EXPIRES"]),
        **options,
    )
    return response


def clear_auth_cookies(response: Response) -> Response:
    options = _cookie_options()
    response.delete_cookie(ACCESS_COOKIE, **options)
    response.delete_cookie(REFRESH_COOKIE, **options)
    return response


# --------------------------------------------------------------------------- #
# Uploads
# --------------------------------------------------------------------------- #


def stash_upload(field: str) -> str | None:
    """Save the multipart file ``field`` under ``UPLOAD_TEMP_DIR``.

    :returns: Local path, or ``None`` when the field is absent or empty.
    """

    storage = request.files.get(field)
    if storage is None or not storage.filename:
        return None
    directory = current_app.config["UPLOAD_TEMP_DIR"]
    os.makedirs(directory, exist_ok=True)
    filename = secure_filename(storage.filename) or "upload"
    path = os.path.join(directory, f"{uuid4().hex}-{filename}")
    storage.save(path)
    return path


@contextmanager
def stashed_uploads(*fields: str) -> Iterator[dict[str, str | None]]:
    """Stash the given multipart fields and remove leftovers afterwards.

    The gateway deletes a file once it uploads it; files never handed to it
    (validation failed first) are removed here.
    """

    paths = {field: stash_upload(field) for field in fields}
    try:
        yield paths
    finally:
        for path in paths.values():
            if path:
                with suppress(FileNotFoundError):
                    os.remove(path)
