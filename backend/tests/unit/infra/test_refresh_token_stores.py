"""Unit tests for the refresh token stores (SQL column and in-memory double)."""

from __future__ import annotations

import pytest

from tests.factories.account import AccountFactory
from vidtube.infra.db import SQLRefreshTokenStore
from vidtube.services._shared.ports import InMemoryRefreshTokenStore


@pytest.fixture(params=["sql", "memory"])
def store(request, session):
    if request.param == "sql":
        return SQLRefreshTokenStore()
    return InMemoryRefreshTokenStore()


def test_replace_keeps_only_latest_token(store, session):
    account = AccountFactory()
    session.commit()

    assert store.current(account.id) is None
    store.replace(account.id, "rt-1")
    store.replace(account.id, "rt-2")
    assert store.current(account.id) == "rt-2"


def test_clear_empties_the_slot(store, session):
    account = AccountFactory()
    session.commit()

    store.replace(account.id, "rt-1")
    store.clear(account.id)
    assert store.current(account.id) is None


def test_sql_store_writes_the_account_column(session):
    account = AccountFactory()
    account_id = account.id
    session.commit()

    SQLRefreshTokenStore().replace(account_id, "rt-col")
    session.expire_all()

    assert session.get(type(account), account_id).refresh_token == "rt-col"
