"""Integration tests for tweets, likes and subscriptions."""

from __future__ import annotations

import pytest

from tests.factories.account import AccountFactory
from tests.factories.tweet import TweetFactory
from tests.factories.video import CommentFactory, VideoFactory
from tests.helpers.assertions import assert_error, assert_ok
from tests.helpers.client import bearer, login
from vidtube.models import Account


@pytest.fixture()
def users(client, session):
    """Two logged-in accounts: ``{"alice": (id, headers), "bob": (id, headers)}``."""
    for name in ("alice", "bob"):
        AccountFactory(username=name, password="pw1")
    session.commit()
    out = {}
    for name in ("alice", "bob"):
        data = login(client, name, "pw1")
        out[name] = (data["user"]["id"], bearer(data["accessToken"]))
    return out


class TestTweets:
    def test_create_list_update_delete(self, client, users):
        alice_id, alice = users["alice"]

        created = client.post("/api/v1/tweets", json={"content": "  first  "}, headers=alice)
        tweet = assert_ok(created, 201)
        assert tweet["content"] == "first"
        assert tweet["owner"] == alice_id

        feed = assert_ok(client.get(f"/api/v1/tweets/user/{alice_id}", headers=alice))
        assert [t["id"] for t in feed] == [tweet["id"]]
        assert feed[0]["ownerDetails"]["username"] == "alice"
        assert feed[0]["likesCount"] == 0
        assert feed[0]["isLiked"] is False

        edited = client.patch(
            f"/api/v1/tweets/{tweet['id']}", json={"content": "edited"}, headers=alice
        )
        assert assert_ok(edited)["content"] == "edited"

        assert assert_ok(client.delete(f"/api/v1/tweets/{tweet['id']}", headers=alice)) == {}
        assert assert_ok(client.get(f"/api/v1/tweets/user/{alice_id}", headers=alice)) == []

    def test_blank_content_rejected(self, client, users):
        _, alice = users["alice"]
        resp = client.post("/api/v1/tweets", json={"content": " "}, headers=alice)
        assert_error(resp, 400, "Content is required")

    def test_only_owner_edits_or_deletes(self, client, users, session):
        alice_id, _ = users["alice"]
        _, bob = users["bob"]
        tweet = TweetFactory(owner=session.get(Account, alice_id))
        session.commit()
        tweet_id = tweet.id

        edit = client.patch(f"/api/v1/tweets/{tweet_id}", json={"content": "x"}, headers=bob)
        assert_error(edit, 403, "Only the owner can edit their tweet")
        assert_error(client.delete(f"/api/v1/tweets/{tweet_id}", headers=bob), 403)

    def test_unknown_user_feed(self, client, users):
        _, alice = users["alice"]
        assert_error(client.get("/api/v1/tweets/user/987654", headers=alice), 404, "User not found")


class TestLikes:
    def test_toggle_each_target(self, client, users, session):
        _, alice = users["alice"]
        video, comment, tweet = VideoFactory(), CommentFactory(), TweetFactory()
        session.commit()
        ids = {"v": video.id, "c": comment.id, "t": tweet.id}

        for code, target_id in ids.items():
            url = f"/api/v1/likes/toggle/{code}/{target_id}"
            assert assert_ok(client.post(url, headers=alice)) == {"isLiked": True}
            assert assert_ok(client.post(url, headers=alice)) == {"isLiked": False}

    def test_toggle_unknown_target(self, client, users):
        _, alice = users["alice"]
        resp = client.post("/api/v1/likes/toggle/v/987654", headers=alice)
        assert_error(resp, 404, "Video not found")

    def test_liked_videos_and_tweet_feed_flag(self, client, users, session):
        alice_id, alice = users["alice"]
        _, bob = users["bob"]
        video = VideoFactory(title="Great")
        tweet = TweetFactory(owner=session.get(Account, alice_id))
        session.commit()
        video_id, tweet_id = video.id, tweet.id

        client.post(f"/api/v1/likes/toggle/v/{video_id}", headers=bob)
        client.post(f"/api/v1/likes/toggle/t/{tweet_id}", headers=bob)

        liked = assert_ok(client.get("/api/v1/likes/videos", headers=bob))
        assert [v["title"] for v in liked] == ["Great"]

        bob_view = assert_ok(client.get(f"/api/v1/tweets/user/{alice_id}", headers=bob))
        alice_view = assert_ok(client.get(f"/api/v1/tweets/user/{alice_id}", headers=alice))
        assert (bob_view[0]["likesCount"], bob_view[0]["isLiked"]) == (1, True)
        assert (alice_view[0]["likesCount"], alice_view[0]["isLiked"]) == (1, False)


class TestSubscriptions:
    def test_toggle_and_list_both_sides(self, client, users, session):
        alice_id, alice = users["alice"]
        bob_id, bob = users["bob"]
        VideoFactory(owner=session.get(Account, alice_id), title="Alice latest")
        session.commit()

        assert assert_ok(client.post(f"/api/v1/subscriptions/c/{alice_id}", headers=bob)) == {
            "subscribed": True
        }

        subscribers = assert_ok(client.get(f"/api/v1/subscriptions/c/{alice_id}", headers=alice))
        assert [s["id"] for s in subscribers] == [bob_id]
        assert subscribers[0]["subscribedToSubscriber"] is False

        channels = assert_ok(client.get(f"/api/v1/subscriptions/u/{bob_id}", headers=bob))
        assert channels[0]["username"] == "alice"
        assert channels[0]["latestVideo"]["title"] == "Alice latest"

        assert assert_ok(client.post(f"/api/v1/subscriptions/c/{alice_id}", headers=bob)) == {
            "subscribed": False
        }
        assert assert_ok(client.get(f"/api/v1/subscriptions/u/{bob_id}", headers=bob)) == []

    def test_self_subscription_rejected(self, client, users):
        alice_id, alice = users["alice"]
        resp = client.post(f"/api/v1/subscriptions/c/{alice_id}", headers=alice)
        assert_error(resp, 400, "You cannot subscribe to your own channel")

    def test_unknown_channel(self, client, users):
        _, alice = users["alice"]
        assert_error(client.post("/api/v1/subscriptions/c/987654", headers=alice), 404)
