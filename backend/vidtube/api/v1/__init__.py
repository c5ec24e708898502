"""API v1 blueprint package bundling versioned routes."""

from __future__ import annotations

from flask import Blueprint

API_VERSION = "v1"

# Import blueprints *only here* to keep imports localized and avoid cycles.
from .health import bp as health_bp  # noqa: E402
from .likes import bp as likes_bp  # noqa: E402
from .subscriptions import bp as subscriptions_bp  # noqa: E402
from .tweets import bp as tweets_bp  # noqa: E402
from .users import bp as users_bp  # noqa: E402

# Each tuple: (blueprint, url_prefix_relative_to_version)
REGISTRY: list[tuple[Blueprint, str]] = [
    (health_bp, ""),  # -> /api/v1
    (users_bp, "/users"),
    (tweets_bp, "/tweets"),
    (likes_bp, "/likes"),
    (subscriptions_bp, "/subscriptions"),
]
