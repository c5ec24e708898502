"""Integration tests for the healthcheck and the error boundary."""

from __future__ import annotations

from tests.helpers.assertions import assert_error, assert_ok


def test_healthcheck(client):
    resp = client.get("/api/v1/healthcheck")

    data = assert_ok(resp)
    assert data["message"] == "Everything is O.K"
    assert data["db"] == "ok"
    assert resp.headers.get("X-Request-ID")


def test_unknown_route_uses_error_envelope(client):
    body = assert_error(client.get("/api/v1/nope"), 404)
    assert "/api/v1/nope" in body["message"]


def test_request_id_is_echoed(client):
    resp = client.get("/api/v1/users/current-user", headers={"X-Request-ID": "req-123"})

    body = assert_error(resp, 401)
    assert body["requestId"] == "req-123"
    assert resp.headers["X-Request-ID"] == "req-123"


def test_validation_error_envelope(client):
    resp = client.post("/api/v1/users/login", json={"username": "x"})

    body = assert_error(resp, 400, "Validation failed")
    assert body["errors"] == [
        {"field": "password", "messages": ["Missing data for required field."]}
    ]
