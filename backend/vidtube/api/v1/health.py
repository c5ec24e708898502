"""Health check endpoint."""

from __future__ import annotations

from flask import Blueprint, current_app
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from vidtube.api.deps import api_response, timing
from vidtube.core.extensions import db

bp = Blueprint("health", __name__)


@bp.get("/healthcheck")
@timing
def healthcheck():
    """Return application and database health information."""

    db_status = "ok"
    try:
        db.session.execute(text("SELECT 1"))
    except SQLAlchemyError:  # pragma: no cover - depends on DB backend
        current_app.logger.exception("healthcheck.db_error")
        db.session.rollback()
        db_status = "fail"
    payload = {
        "message": "Everything is O.K",
        "db": db_status,
        "version": current_app.config.get("APP_VERSION", "dev"),
    }
    return api_response(payload, "ok")
