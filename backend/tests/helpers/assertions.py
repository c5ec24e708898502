"""Assertion helper utilities for tests."""

from __future__ import annotations

from typing import Any


def assert_json_keys(data: dict, required: set[str]) -> None:
    """Ensure that all required keys are present in ``data``.

    Raises
    ------
    AssertionError
        If any required key is missing.
    """

    missing = required - data.keys()
    assert not missing, f"Missing keys: {', '.join(sorted(missing))}"


def assert_error(resp: Any, status: int, message: str | None = None) -> dict:
    """Validate the error envelope and return its body.

    Parameters
    ----------
    resp:
        Flask test response.
    status:
        Expected HTTP status, mirrored in ``statusCode``.
    message:
        Expected ``message`` when given.
    """

    assert resp.status_code == status, resp.get_json()
    body = resp.get_json()
    assert_json_keys(body, {"success", "statusCode", "message", "errors", "data", "requestId"})
    assert body["success"] is False
    assert body["statusCode"] == status
    assert body["data"] is None
    if message is not None:
        assert body["message"] == message
    return body


def assert_ok(resp: Any, status: int = 200) -> Any:
    """Validate the success envelope and return its ``data``."""

    assert resp.status_code == status, resp.get_json()
    body = resp.get_json()
    assert_json_keys(body, {"statusCode", "data", "message", "success"})
    assert body["success"] is True
    assert body["statusCode"] == status
    return body["data"]
