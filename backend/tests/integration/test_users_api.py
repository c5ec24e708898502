"""Integration tests for profile and channel endpoints."""

from __future__ import annotations

import io

import pytest

from tests.factories.account import AccountFactory
from tests.factories.social import SubscriptionFactory
from tests.factories.video import VideoFactory, WatchHistoryEntryFactory
from tests.helpers.assertions import assert_error, assert_ok
from tests.helpers.client import bearer, login

BASE = "/api/v1/users"


@pytest.fixture()
def auth(client, session):
    """Log in a fresh account and return ``(account_id, headers)``."""
    account = AccountFactory(username="viewer", email="viewer@example.com", password="pw1")
    session.commit()
    account_id = account.id
    tokens = login(client, "viewer", "pw1")
    return account_id, bearer(tokens["accessToken"])


def test_current_user(client, auth):
    account_id, headers = auth
    data = assert_ok(client.get(f"{BASE}/current-user", headers=headers))
    assert data["id"] == account_id
    assert data["email"] == "viewer@example.com"


def test_update_account(client, auth):
    _, headers = auth
    resp = client.patch(
        f"{BASE}/update-account", json={"fullName": "Renamed"}, headers=headers
    )
    assert assert_ok(resp)["fullName"] == "Renamed"

    assert_error(client.patch(f"{BASE}/update-account", json={}, headers=headers), 400)


def test_change_password_then_login_with_new_one(client, auth):
    _, headers = auth
    resp = client.post(
        f"{BASE}/change-password",
        json={"oldPassword": "pw1", "newPassword": "pw2"},
        headers=headers,
    )
    assert assert_ok(resp) == {}
    login(client, "viewer", "pw2")

    bad = client.post(
        f"{BASE}/change-password",
        json={"oldPassword": "nope", "newPassword": "pw3"},
        headers=headers,
    )
    assert_error(bad, 400, "Invalid old password")


def test_change_username(client, auth, session):
    _, headers = auth
    AccountFactory(username="taken")
    session.commit()

    ok = client.post(f"{BASE}/change-username", json={"newUsername": "Fresh"}, headers=headers)
    assert assert_ok(ok)["username"] == "fresh"

    taken = client.post(f"{BASE}/change-username", json={"newUsername": "taken"}, headers=headers)
    assert_error(taken, 409, "Username already taken")


def test_update_avatar_and_cover(client, auth, assets):
    _, headers = auth
    avatar = client.patch(
        f"{BASE}/avatar",
        data={"avatar": (io.BytesIO(b"img"), "new.png")},
        content_type="multipart/form-data",
        headers=headers,
    )
    assert assert_ok(avatar)["avatar"]["url"] in assets.stored.values()

    cover = client.patch(
        f"{BASE}/cover-image",
        data={"coverImage": (io.BytesIO(b"img"), "cover.png")},
        content_type="multipart/form-data",
        headers=headers,
    )
    assert assert_ok(cover)["coverImage"]["url"] in assets.stored.values()

    missing = client.patch(f"{BASE}/avatar", headers=headers)
    assert_error(missing, 400, "Avatar file is missing")


def test_channel_profile(client, auth, session):
    viewer_id, headers = auth
    channel = AccountFactory(username="creator")
    SubscriptionFactory(subscriber_id=viewer_id, channel_id=channel.id)
    session.commit()

    data = assert_ok(client.get(f"{BASE}/c/Creator", headers=headers))
    assert data["username"] == "creator"
    assert data["subscribersCount"] == 1
    assert data["channelsSubscribedToCount"] == 0
    assert data["isSubscribed"] is True

    assert_error(client.get(f"{BASE}/c/ghost", headers=headers), 404, "Channel does not exist")


def test_watch_history(client, auth, session):
    viewer_id, headers = auth
    video = VideoFactory(title="Watched")
    WatchHistoryEntryFactory(account_id=viewer_id, video=video)
    session.commit()

    data = assert_ok(client.get(f"{BASE}/history", headers=headers))
    assert [v["title"] for v in data] == ["Watched"]
    assert data[0]["owner"]["username"]
    assert data[0]["videoFile"].endswith(".mp4")
