"""Unit tests for AccountService."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from tests.factories.account import AccountFactory
from tests.factories.social import SubscriptionFactory
from tests.factories.video import VideoFactory, WatchHistoryEntryFactory
from vidtube.models import Account
from vidtube.services._shared.base import ServiceContext
from vidtube.services._shared.errors import (
    ConflictError,
    NotFoundError,
    UploadError,
    ValidationError,
)
from vidtube.services._shared.ports import InMemoryAssetGateway
from vidtube.services.accounts import AccountDetailsIn, AccountService, PasswordChangeIn


@pytest.fixture()
def gateway() -> InMemoryAssetGateway:
    return InMemoryAssetGateway()


@pytest.fixture()
def me(session):
    account = AccountFactory(username="me", email="me@example.com", password="pw1")
    session.commit()
    return account


@pytest.fixture()
def service(me, gateway) -> AccountService:
    return AccountService(assets=gateway, ctx=ServiceContext(actor_id=me.id))


class TestQueries:
    def test_get_current_account(self, service, me):
        out = service.get_current_account()
        assert out.id == me.id
        assert out.username == "me"

    def test_channel_profile_with_aggregates(self, service, me, session):
        channel = AccountFactory(username="creator")
        other = AccountFactory()
        SubscriptionFactory(subscriber_id=me.id, channel_id=channel.id)
        SubscriptionFactory(subscriber_id=other.id, channel_id=channel.id)
        SubscriptionFactory(subscriber_id=channel.id, channel_id=other.id)
        session.commit()

        profile = service.get_channel_profile("CREATOR")

        assert profile.id == channel.id
        assert profile.subscribers_count == 2
        assert profile.channels_subscribed_to_count == 1
        assert profile.is_subscribed is True

    def test_channel_profile_not_subscribed(self, service, session):
        AccountFactory(username="loner")
        session.commit()

        profile = service.get_channel_profile("loner")
        assert profile.subscribers_count == 0
        assert profile.is_subscribed is False

    def test_channel_profile_errors(self, service):
        with pytest.raises(ValidationError, match="Username is missing"):
            service.get_channel_profile("  ")
        with pytest.raises(NotFoundError, match="Channel does not exist"):
            service.get_channel_profile("ghost")

    def test_watch_history_in_view_order(self, service, me, session):
        first, second = VideoFactory(), VideoFactory()
        t0 = datetime(2024, 1, 1, tzinfo=UTC)
        WatchHistoryEntryFactory(account_id=me.id, video=second, watched_at=t0 + timedelta(days=1))
        WatchHistoryEntryFactory(account_id=me.id, video=first, watched_at=t0)
        session.commit()

        history = service.get_watch_history()

        assert [v.id for v in history] == [first.id, second.id]
        assert history[0].owner.id == first.owner_id

    def test_watch_history_empty(self, service):
        assert service.get_watch_history() == []


class TestDetails:
    def test_update_full_name_and_email(self, service):
        out = service.update_account_details(
            AccountDetailsIn(full_name=" New Name ", email="NEW@example.com")
        )
        assert out.full_name == "New Name"
        assert out.email == "new@example.com"

    def test_update_requires_a_field(self, service):
        with pytest.raises(ValidationError, match="All fields are required"):
            service.update_account_details(AccountDetailsIn())

    def test_update_email_conflict(self, service, session):
        AccountFactory(email="taken@example.com")
        session.commit()

        with pytest.raises(ConflictError, match="Email already in use"):
            service.update_account_details(AccountDetailsIn(email="taken@example.com"))

    def test_keeping_own_email_is_allowed(self, service):
        out = service.update_account_details(AccountDetailsIn(email="me@example.com"))
        assert out.email == "me@example.com"


class TestPassword:
    def test_change_password(self, service, me, session):
        service.change_password(PasswordChangeIn(old_password="pw1", new_password="newpw"))

        session.expire_all()
        assert session.get(Account, me.id).verify_password("newpw")

    def test_wrong_old_password(self, service):
        with pytest.raises(ValidationError, match="Invalid old password"):
            service.change_password(PasswordChangeIn(old_password="bad", new_password="newpw"))

    def test_new_password_policy(self, service):
        with pytest.raises(ValidationError, match="at least 3 characters"):
            service.change_password(PasswordChangeIn(old_password="pw1", new_password="x"))


class TestUsername:
    def test_change_username_normalizes(self, service):
        assert service.change_username("  NewHandle ").username == "newhandle"

    def test_change_username_blank(self, service):
        with pytest.raises(ValidationError, match="New username is required"):
            service.change_username("")

    def test_change_username_taken(self, service, session):
        AccountFactory(username="taken")
        session.commit()

        with pytest.raises(ConflictError, match="Username already taken"):
            service.change_username("Taken")


class TestImages:
    def test_update_avatar_replaces_and_deletes_old(self, service, gateway, me, image_file):
        first = service.update_avatar(image_file("one.png"))
        second = service.update_avatar(image_file("two.png"))

        assert second.avatar.public_id != first.avatar.public_id
        assert gateway.deleted[-1] == first.avatar.public_id
        assert first.avatar.public_id not in gateway.stored

    def test_update_cover_image(self, service, gateway, image_file):
        out = service.update_cover_image(image_file("cover.png"))
        assert out.cover_image.url in gateway.stored.values()
        # the account had no cover before, so nothing was deleted
        assert gateway.deleted == []

    def test_missing_files(self, service):
        with pytest.raises(ValidationError, match="Avatar file is missing"):
            service.update_avatar(None)
        with pytest.raises(ValidationError, match="Cover image file is missing"):
            service.update_cover_image("")

    def test_upload_failure_keeps_previous_avatar(self, service, gateway, me, image_file):
        before = service.get_current_account().avatar
        gateway.fail_uploads = True

        with pytest.raises(UploadError, match="Failed to upload avatar"):
            service.update_avatar(image_file())
        assert service.get_current_account().avatar == before

    def test_failed_delete_does_not_fail_request(self, service, gateway, image_file, monkeypatch):
        def _boom(public_id):
            raise UploadError("Failed to delete file")

        monkeypatch.setattr(gateway, "delete", _boom)

        out = service.update_avatar(image_file())
        assert out.avatar.url in gateway.stored.values()
