"""Factory Boy definition for :class:`vidtube.models.account.Account`."""

from __future__ import annotations

import factory

from tests.factories import BaseFactory
from vidtube.models.account import Account

DEFAULT_PASSWORD = "Passw0rd!"


class AccountFactory(BaseFactory):
    """Build persisted :class:`Account` instances with a hashed password."""

    class Meta:
        model = Account

    id = None  # let autoincrement handle it
    email = factory.Sequence(lambda n: f"user{n}@example.com")
    username = factory.Sequence(lambda n: f"user{n}")
    full_name = factory.LazyAttribute(lambda o: o.username.capitalize())
    password_hash = factory.LazyFunction(lambda: "")  # set via postgen
    avatar_public_id = factory.Sequence(lambda n: f"avatar-{n}")
    avatar_url = factory.LazyAttribute(lambda o: f"memory://assets/{o.avatar_public_id}/a.png")
    cover_image_public_id = ""
    cover_image_url = ""

    @factory.post_generation
    def password(obj, create, extracted, **kwargs):
        """Set password using model setter (ensures hashing)."""
        obj.password = extracted or DEFAULT_PASSWORD
