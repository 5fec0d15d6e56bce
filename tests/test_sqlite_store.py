"""Tests for the SQLite store backend."""

from pathlib import Path

import pytest

from memoboard.store.base import COMMENTS_TABLE, MEMOS_TABLE, Order, StoreAuthError, StoreError
from memoboard.store.sqlite import SQLiteStore


@pytest.mark.asyncio
async def test_insert_assigns_id(store: SQLiteStore):
    """Insert returns the persisted row with a store-assigned id."""
    row = await store.insert(MEMOS_TABLE, {"content": "hi", "created_at": "2026-01-01T00:00:00+00:00"})
    assert row["id"]
    assert row["content"] == "hi"
    assert row["user_id"] is None


@pytest.mark.asyncio
async def test_select_with_filters(store: SQLiteStore):
    """Equality filters narrow the result."""
    for memo_id in ("m1", "m2"):
        await store.insert(
            COMMENTS_TABLE,
            {"memo_id": memo_id, "content": f"on {memo_id}", "created_at": "2026-01-01T00:00:00+00:00"},
        )
    rows = await store.select(COMMENTS_TABLE, {"memo_id": "m1"})
    assert [r["content"] for r in rows] == ["on m1"]


@pytest.mark.asyncio
async def test_select_order(store: SQLiteStore):
    """Single-column ordering in both directions."""
    for i in range(3):
        await store.insert(MEMOS_TABLE, {"content": f"m{i}", "created_at": f"2026-01-01T00:00:0{i}+00:00"})

    desc = await store.select(MEMOS_TABLE, order=Order("created_at", descending=True))
    asc = await store.select(MEMOS_TABLE, order=Order("created_at"))
    assert [r["content"] for r in desc] == ["m2", "m1", "m0"]
    assert [r["content"] for r in asc] == ["m0", "m1", "m2"]


@pytest.mark.asyncio
async def test_delete_counts_rows(store: SQLiteStore):
    """Delete reports affected rows; missing ids affect zero."""
    row = await store.insert(MEMOS_TABLE, {"content": "bye", "created_at": "2026-01-01T00:00:00+00:00"})
    assert await store.delete(MEMOS_TABLE, {"id": row["id"]}) == 1
    assert await store.delete(MEMOS_TABLE, {"id": row["id"]}) == 0


@pytest.mark.asyncio
async def test_delete_requires_filters(store: SQLiteStore):
    with pytest.raises(StoreError):
        await store.delete(MEMOS_TABLE, {})


@pytest.mark.asyncio
async def test_unknown_table_and_column(store: SQLiteStore):
    """Only known tables and columns reach SQL."""
    with pytest.raises(StoreError):
        await store.select("users")
    with pytest.raises(StoreError):
        await store.select(MEMOS_TABLE, {"content; DROP TABLE memos": "x"})


@pytest.mark.asyncio
async def test_session_resolves_user(store: SQLiteStore):
    """Issued token resolves to the user it was issued for."""
    token = await store.create_session("bob@example.com")
    identity = await store.get_user(token)
    assert identity.email == "bob@example.com"

    # Second session for the same email maps to the same user
    other = await store.create_session("bob@example.com")
    assert other != token
    assert (await store.get_user(other)).id == identity.id


@pytest.mark.asyncio
async def test_revoked_session_rejected(store: SQLiteStore):
    token = await store.create_session("bob@example.com")
    assert await store.revoke_session(token) is True
    with pytest.raises(StoreAuthError):
        await store.get_user(token)
    assert await store.revoke_session(token) is False


@pytest.mark.asyncio
async def test_get_user_without_token(store: SQLiteStore):
    with pytest.raises(StoreAuthError):
        await store.get_user(None)
    with pytest.raises(StoreAuthError):
        await store.get_user("never-issued")


@pytest.mark.asyncio
async def test_accessor_carries_token(store: SQLiteStore, alice_token: str):
    """Accessor delegates rows to the store and identity to its own token."""
    accessor = store.accessor(alice_token)
    assert accessor.token == alice_token
    identity = await accessor.get_user()
    assert identity.email == "alice@example.com"

    with pytest.raises(StoreAuthError):
        await store.accessor(None).get_user()


@pytest.mark.asyncio
async def test_not_connected(tmp_path: Path):
    """Operations before connect() raise StoreError; health check reports down."""
    store = SQLiteStore(tmp_path / "never.db")
    with pytest.raises(StoreError):
        await store.select(MEMOS_TABLE)
    assert await store.health_check() is False


@pytest.mark.asyncio
async def test_health_check(store: SQLiteStore):
    assert await store.health_check() is True
