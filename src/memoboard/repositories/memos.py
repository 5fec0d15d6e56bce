"""Memo repository."""

from collections.abc import Callable
from datetime import datetime

from memoboard.core.errors import AuthenticationError, UpstreamError, ValidationError
from memoboard.core.logging import get_logger
from memoboard.core.result import Result
from memoboard.core.types import Identity, Memo, ownership_fields, utc_now
from memoboard.store.base import MEMOS_TABLE, Order, StoreAccessor, StoreAuthError, StoreError

logger = get_logger("repositories.memos")

NEWEST_FIRST = Order("created_at", descending=True)


def validate_content(content: object) -> str | None:
    """Return an error message if content is missing or blank."""
    if not isinstance(content, str) or not content.strip():
        return "Content is required"
    return None


class MemoRepository:
    """CRUD for memos over a scoped accessor."""

    def __init__(self, accessor: StoreAccessor, clock: Callable[[], datetime] = utc_now):
        self.accessor = accessor
        self.clock = clock

    async def create(self, content: str | None, identity: Identity | None) -> Result[Memo]:
        """Insert a memo stamped with `identity`; returns the persisted row."""
        problem = validate_content(content)
        if problem:
            return Result.failure(ValidationError(problem))

        record = {
            "content": content,
            "created_at": self.clock().isoformat(),
            **ownership_fields(identity),
        }
        try:
            row = await self.accessor.insert(MEMOS_TABLE, record)
        except StoreAuthError as e:
            logger.warning(f"Store rejected credential, failed to create memo: {e}")
            return Result.failure(AuthenticationError("Not authorized"))
        except StoreError as e:
            logger.error(f"Failed to create memo: {e}")
            return Result.failure(UpstreamError("Failed to create memo"))

        memo = Memo.from_dict(row)
        logger.info(f"Created memo {memo.id}" + (f" for {identity.id}" if identity else ""))
        return Result.success(memo)

    async def list(self) -> Result[list[Memo]]:
        """All memos, newest first."""
        try:
            rows = await self.accessor.select(MEMOS_TABLE, order=NEWEST_FIRST)
        except StoreAuthError as e:
            logger.warning(f"Store rejected credential, failed to list memos: {e}")
            return Result.failure(AuthenticationError("Not authorized"))
        except StoreError as e:
            logger.error(f"Failed to list memos: {e}")
            return Result.failure(UpstreamError("Failed to fetch memos"))
        return Result.success([Memo.from_dict(row) for row in rows])

    async def delete(self, memo_id: str) -> Result[int]:
        """Delete by id. Zero rows affected is still success."""
        try:
            count = await self.accessor.delete(MEMOS_TABLE, {"id": memo_id})
        except StoreAuthError as e:
            logger.warning(f"Store rejected credential, failed to delete memo {memo_id}: {e}")
            return Result.failure(AuthenticationError("Not authorized"))
        except StoreError as e:
            logger.error(f"Failed to delete memo {memo_id}: {e}")
            return Result.failure(UpstreamError("Failed to delete memo"))
        logger.info(f"Deleted memo {memo_id} ({count} rows)")
        return Result.success(count)
