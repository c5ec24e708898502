"""Pytest fixtures configuring an isolated transactional database layer.

Each test runs inside a connection-level transaction against an in-memory
SQLite database. The session joins it through SAVEPOINTs, so service-level
``commit()`` calls never leak data between cases.
"""

from __future__ import annotations

import os

import pytest
from sqlalchemy import event
from sqlalchemy.orm import scoped_session, sessionmaker

from vidtube.core.config import TestingConfig
from vidtube.core.extensions import ASSET_GATEWAY_KEY
from vidtube.core.extensions import db as _db  # Flask-SQLAlchemy instance
from vidtube.factory import create_app  # application factory under test
from vidtube.services._shared.ports import InMemoryAssetGateway


@pytest.fixture(scope="session")
def app():
    """Create a Flask application configured for testing.

    Returns
    -------
    flask.Flask
        Application instance with :class:`TestingConfig` applied and logging
        noise reduced.
    """
    # Ensure env-based config does not leak into tests
    os.environ.pop("DATABASE_URL", None)
    app = create_app(TestingConfig)
    app.logger.setLevel("WARNING")
    return app


@pytest.fixture(scope="session")
def db(app):
    """Create database tables once per test session.

    Yields
    ------
    flask_sqlalchemy.SQLAlchemy
        Database extension bound to the testing application.
    """
    with app.app_context():
        _db.create_all()
        yield _db
        _db.session.remove()
        _db.drop_all()


def _emit_begin(conn):
    conn.exec_driver_sql("BEGIN")


@pytest.fixture(scope="session")
def connection(db):
    """Keep a dedicated DBAPI connection open for the whole session.

    Notes
    -----
    pysqlite neither emits ``BEGIN`` for ``Connection.begin()`` nor keeps a
    SAVEPOINT inside an outer transaction; releasing the first SAVEPOINT
    would commit. On SQLite the driver is switched to autocommit and
    ``BEGIN`` is emitted from the engine's ``begin`` event instead.
    """
    engine = db.engine
    is_sqlite = engine.dialect.name == "sqlite"
    if is_sqlite:
        event.listen(engine, "begin", _emit_begin)
    conn = engine.connect()
    if is_sqlite:
        conn.connection.driver_connection.isolation_level = None
    try:
        yield conn
    finally:
        conn.close()
        if is_sqlite:
            event.remove(engine, "begin", _emit_begin)


@pytest.fixture(scope="function")
def session(db, connection):
    """Provide a SQLAlchemy session wrapped in an outer transaction.

    Notes
    -----
    ``join_transaction_mode="create_savepoint"`` turns every session-level
    ``commit()``/``rollback()`` into a SAVEPOINT release/rollback, so the
    outer transaction can discard everything at teardown.
    """
    # 1) Top-level transaction
    top_trans = connection.begin()

    # 2) Scoped session bound to the connection
    SessionFactory = sessionmaker(
        bind=connection,
        join_transaction_mode="create_savepoint",
        autoflush=False,
    )
    scoped = scoped_session(SessionFactory)

    # 3) Monkey-patch db.session so app code uses this scoped session
    original_session = db.session
    db.session.remove()
    db.session = scoped

    try:
        yield scoped
    finally:
        scoped.remove()
        db.session = original_session
        top_trans.rollback()


@pytest.fixture()
def assets(app, monkeypatch, tmp_path):
    """Swap in a fresh in-memory asset gateway and a per-test upload dir."""
    gateway = InMemoryAssetGateway()
    monkeypatch.setitem(app.extensions, ASSET_GATEWAY_KEY, gateway)
    monkeypatch.setitem(app.config, "UPLOAD_TEMP_DIR", str(tmp_path / "uploads"))
    return gateway


@pytest.fixture()
def client(app, session, assets):
    """Return a Flask test client; cookies are passed explicitly per request."""
    return app.test_client(use_cookies=False)


@pytest.fixture(scope="session")
def faker():
    """Provide a :class:`faker.Faker` instance seeded for deterministic tests."""
    from faker import Faker

    fk = Faker()
    Faker.seed(1337)
    return fk


@pytest.fixture()
def image_file(tmp_path):
    """Return a factory writing a small fake image and returning its path."""

    def _make(name: str = "image.png") -> str:
        path = tmp_path / name
        path.write_bytes(b"\x89PNG\r\n\x1a\nfake")
        return str(path)

    return _make


# -- Hook up Factory Boy to pytest SQLAlchemy session --------------------------
@pytest.fixture(autouse=True)
def _factories_session(session):
    """Wire Factory Boy's session helper to the transactional session fixture."""
    from tests.factories import SQLAlchemySession

    SQLAlchemySession.set(session)
    yield
