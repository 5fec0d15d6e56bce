"""Shared fixtures: a temporary SQLite-backed factory and test doubles."""

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from memoboard.core.types import Identity
from memoboard.store.base import StoreAccessor, StoreAuthError, StoreError
from memoboard.store.factory import AccessorFactory
from memoboard.store.sqlite import SQLiteStore


class TickingClock:
    """Deterministic clock: each call is one second after the previous."""

    def __init__(self, start: datetime | None = None):
        self.current = start or datetime(2026, 1, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        self.current += timedelta(seconds=1)
        return self.current


class FailingAccessor(StoreAccessor):
    """Accessor whose store is down."""

    def __init__(self, token: str | None = "tok"):
        self.token = token
        self.calls: list[str] = []

    async def insert(self, table, record):
        self.calls.append("insert")
        raise StoreError("connection refused")

    async def select(self, table, filters=None, order=None):
        self.calls.append("select")
        raise StoreError("connection refused")

    async def delete(self, table, filters):
        self.calls.append("delete")
        raise StoreError("connection refused")

    async def get_user(self) -> Identity:
        self.calls.append("get_user")
        raise StoreError("connection refused")


class RejectingAccessor(FailingAccessor):
    """Accessor whose credential the store refuses (expired or revoked token)."""

    async def insert(self, table, record):
        self.calls.append("insert")
        raise StoreAuthError("JWT expired")

    async def select(self, table, filters=None, order=None):
        self.calls.append("select")
        raise StoreAuthError("JWT expired")

    async def delete(self, table, filters):
        self.calls.append("delete")
        raise StoreAuthError("JWT expired")


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock()


@pytest.fixture
async def factory(tmp_path: Path):
    """Started factory over a temporary SQLite store."""
    factory = AccessorFactory(SQLiteStore(tmp_path / "test.db"))
    await factory.start()
    yield factory
    await factory.close()


@pytest.fixture
def store(factory: AccessorFactory) -> SQLiteStore:
    return factory.backend


@pytest.fixture
async def alice_token(store: SQLiteStore) -> str:
    return await store.create_session("alice@example.com")


@pytest.fixture
def failing_accessor() -> FailingAccessor:
    return FailingAccessor()


@pytest.fixture
def rejecting_accessor() -> RejectingAccessor:
    return RejectingAccessor()
