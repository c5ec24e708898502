"""Global Flask extension instances and initialization helpers."""

from __future__ import annotations

from flask import Flask, current_app
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import MetaData

from vidtube.services._shared.ports.asset_gateway import AssetGateway

# Global naming convention for all constraints
convention = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=convention)

# Global singletons (import-safe)
db: SQLAlchemy = SQLAlchemy(session_options={"autoflush": False}, metadata=metadata)
migrate = Migrate(render_as_batch=True)

ASSET_GATEWAY_KEY = "asset_gateway"


def init_app(app: Flask) -> None:
    """Initialize SQLAlchemy, migrations and the asset storage gateway.

    Parameters
    ----------
    app: flask.Flask
        Application used to bind extension instances. This call imports the
        :mod:`vidtube.models` package to ensure SQLAlchemy metadata is ready
        for migrations.
    """
    db.init_app(app)

    # Ensure models are imported so Alembic sees metadata
    from vidtube import models as _models  # noqa: F401

    migrate.init_app(app, db)

    from vidtube.infra.storage import build_asset_gateway

    app.extensions[ASSET_GATEWAY_KEY] = build_asset_gateway(app.config)


def get_asset_gateway() -> AssetGateway:
    """Return the asset gateway bound to the current application."""
    gateway = current_app.extensions.get(ASSET_GATEWAY_KEY)
    if gateway is None:
        raise RuntimeError("Asset gateway is not initialized. Call init_app() first.")
    return gateway
