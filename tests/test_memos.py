"""Tests for the memo repository."""

import pytest

from memoboard.core.errors import AuthenticationError, UpstreamError, ValidationError
from memoboard.core.types import Identity
from memoboard.repositories.memos import MemoRepository
from memoboard.store.factory import AccessorFactory

ALICE = Identity(id="u-alice", email="alice@example.com")


@pytest.fixture
def memos(factory: AccessorFactory, clock) -> MemoRepository:
    return MemoRepository(factory.anonymous(), clock)


@pytest.mark.asyncio
async def test_create_stamps_ownership(memos: MemoRepository):
    """Created memo carries store id, core timestamp and identity."""
    result = await memos.create("hello", ALICE)
    assert result.ok
    memo = result.value
    assert memo.id
    assert memo.content == "hello"
    assert memo.created_at == "2026-01-01T00:00:01+00:00"
    assert memo.user_id == "u-alice"
    assert memo.author_email == "alice@example.com"


@pytest.mark.asyncio
async def test_create_anonymous_has_no_owner(memos: MemoRepository):
    memo = (await memos.create("legacy", None)).value
    assert memo.user_id is None
    assert memo.author_email is None


@pytest.mark.asyncio
@pytest.mark.parametrize("content", [None, "", "   ", 42])
async def test_create_rejects_missing_content(memos: MemoRepository, content):
    """Empty content is a validation failure and nothing is stored."""
    result = await memos.create(content, ALICE)
    assert isinstance(result.error, ValidationError)
    assert result.error.status_code == 400
    assert (await memos.list()).value == []


@pytest.mark.asyncio
async def test_round_trip(memos: MemoRepository):
    await memos.create("older", ALICE)
    await memos.create("hello", ALICE)
    listed = (await memos.list()).value
    assert [m.content for m in listed] == ["hello", "older"]


@pytest.mark.asyncio
async def test_list_newest_first(memos: MemoRepository):
    """Strictly decreasing created_at for memos created in sequence."""
    for i in range(5):
        await memos.create(f"memo {i}", ALICE)

    listed = (await memos.list()).value
    stamps = [m.created_at for m in listed]
    assert stamps == sorted(stamps, reverse=True)
    assert len(set(stamps)) == 5
    assert listed[0].content == "memo 4"


@pytest.mark.asyncio
async def test_list_empty(memos: MemoRepository):
    result = await memos.list()
    assert result.ok
    assert result.value == []


@pytest.mark.asyncio
async def test_delete_idempotent(memos: MemoRepository):
    """Deleting twice succeeds both times; the memo is gone after the first."""
    memo = (await memos.create("temp", ALICE)).value

    first = await memos.delete(memo.id)
    second = await memos.delete(memo.id)

    assert first.ok and first.value == 1
    assert second.ok and second.value == 0
    assert (await memos.list()).value == []


@pytest.mark.asyncio
async def test_store_failures_become_upstream_errors(failing_accessor):
    """Store errors are translated, not raised, and carry no store detail."""
    memos = MemoRepository(failing_accessor)
    for result in (
        await memos.create("x", ALICE),
        await memos.list(),
        await memos.delete("m1"),
    ):
        assert isinstance(result.error, UpstreamError)
        assert "connection refused" not in result.error.message


@pytest.mark.asyncio
async def test_rejected_credential_is_authentication_error(rejecting_accessor):
    """A token the store refuses maps to 401, not a store failure."""
    memos = MemoRepository(rejecting_accessor)
    for result in (
        await memos.create("x", ALICE),
        await memos.list(),
        await memos.delete("m1"),
    ):
        assert isinstance(result.error, AuthenticationError)
        assert result.error.status_code == 401
        assert "JWT" not in result.error.message
