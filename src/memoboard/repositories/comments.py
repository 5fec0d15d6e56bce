"""Comment repository.

The store has no foreign key from comments to memos, so create() checks
that the target memo exists before inserting.
"""

from collections.abc import Callable
from datetime import datetime

from memoboard.auth.identity import IdentityResolver
from memoboard.core.errors import AuthenticationError, UpstreamError, ValidationError
from memoboard.core.logging import get_logger
from memoboard.core.result import Result
from memoboard.core.types import Comment, Identity, ownership_fields, utc_now
from memoboard.repositories.memos import validate_content
from memoboard.store.base import COMMENTS_TABLE, MEMOS_TABLE, Order, StoreAccessor, StoreAuthError, StoreError

logger = get_logger("repositories.comments")

OLDEST_FIRST = Order("created_at", descending=False)


class CommentRepository:
    """CRUD for comments over a scoped accessor."""

    def __init__(
        self,
        accessor: StoreAccessor,
        resolver: IdentityResolver | None = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.accessor = accessor
        self.resolver = resolver
        self.clock = clock

    async def memo_exists(self, memo_id: str) -> bool:
        """Check the memo is present. A failed lookup counts as absent."""
        try:
            rows = await self.accessor.select(MEMOS_TABLE, {"id": memo_id})
        except StoreError as e:
            logger.error(f"Memo existence check failed for {memo_id}: {e}")
            return False
        return bool(rows)

    async def create(
        self,
        memo_id: str,
        content: str | None,
        identity: Identity | None = None,
    ) -> Result[Comment]:
        """Insert a comment on an existing memo.

        Steps run in order: content validation, memo existence check,
        identity resolution (when the caller has not resolved it and a
        resolver is available), insert.
        """
        problem = validate_content(content)
        if problem:
            return Result.failure(ValidationError(problem))

        if not memo_id or not await self.memo_exists(memo_id):
            logger.info(f"Rejected comment on unknown memo {memo_id}")
            return Result.failure(ValidationError("Invalid memo id"))

        if identity is None and self.resolver is not None and self.accessor.token:
            resolved = await self.resolver.resolve(self.accessor)
            if not resolved.ok:
                return Result.failure(resolved.error)
            identity = resolved.value

        record = {
            "memo_id": memo_id,
            "content": content,
            "created_at": self.clock().isoformat(),
            **ownership_fields(identity),
        }
        try:
            row = await self.accessor.insert(COMMENTS_TABLE, record)
        except StoreAuthError as e:
            logger.warning(f"Store rejected credential, failed to create comment on memo {memo_id}: {e}")
            return Result.failure(AuthenticationError("Not authorized"))
        except StoreError as e:
            logger.error(f"Failed to create comment on memo {memo_id}: {e}")
            return Result.failure(UpstreamError("Failed to create comment"))

        comment = Comment.from_dict(row)
        logger.info(f"Created comment {comment.id} on memo {memo_id}")
        return Result.success(comment)

    async def list(self, memo_id: str) -> Result[list[Comment]]:
        """Comments on one memo, oldest first."""
        try:
            rows = await self.accessor.select(COMMENTS_TABLE, {"memo_id": memo_id}, OLDEST_FIRST)
        except StoreAuthError as e:
            logger.warning(f"Store rejected credential, failed to list comments for memo {memo_id}: {e}")
            return Result.failure(AuthenticationError("Not authorized"))
        except StoreError as e:
            logger.error(f"Failed to list comments for memo {memo_id}: {e}")
            return Result.failure(UpstreamError("Failed to fetch comments"))
        return Result.success([Comment.from_dict(row) for row in rows])

    async def delete(self, comment_id: str) -> Result[int]:
        """Delete by id. Zero rows affected is still success."""
        try:
            count = await self.accessor.delete(COMMENTS_TABLE, {"id": comment_id})
        except StoreAuthError as e:
            logger.warning(f"Store rejected credential, failed to delete comment {comment_id}: {e}")
            return Result.failure(AuthenticationError("Not authorized"))
        except StoreError as e:
            logger.error(f"Failed to delete comment {comment_id}: {e}")
            return Result.failure(UpstreamError("Failed to delete comment"))
        logger.info(f"Deleted comment {comment_id} ({count} rows)")
        return Result.success(count)
