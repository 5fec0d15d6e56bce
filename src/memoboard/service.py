"""
Request handling core.

Each method runs one request end to end: authorize, build repositories
on the request's accessor, run the operation. Nothing here touches HTTP;
the api module maps results onto responses.
"""

from collections.abc import Callable
from datetime import datetime

from memoboard.auth.identity import IdentityResolver
from memoboard.auth.policy import AuthorizationPolicy, Operation
from memoboard.core.result import Result
from memoboard.core.types import Comment, Memo, utc_now
from memoboard.repositories.comments import CommentRepository
from memoboard.repositories.memos import MemoRepository
from memoboard.store.factory import AccessorFactory


class NotesService:
    """Memo and comment operations behind the authorization gate."""

    def __init__(
        self,
        factory: AccessorFactory,
        allow_anonymous_writes: bool = False,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.factory = factory
        self.resolver = IdentityResolver()
        self.policy = AuthorizationPolicy(factory, self.resolver, allow_anonymous_writes)
        self.clock = clock

    # Memos

    async def list_memos(self, token: str | None) -> Result[list[Memo]]:
        auth = await self.policy.authorize(Operation.LIST_MEMOS, token)
        if not auth.ok:
            return Result.failure(auth.error)
        return await MemoRepository(auth.value.accessor, self.clock).list()

    async def create_memo(self, token: str | None, content: str | None) -> Result[Memo]:
        auth = await self.policy.authorize(Operation.CREATE_MEMO, token)
        if not auth.ok:
            return Result.failure(auth.error)
        ctx = auth.value
        return await MemoRepository(ctx.accessor, self.clock).create(content, ctx.identity)

    async def delete_memo(self, token: str | None, memo_id: str) -> Result[int]:
        auth = await self.policy.authorize(Operation.DELETE_MEMO, token)
        if not auth.ok:
            return Result.failure(auth.error)
        return await MemoRepository(auth.value.accessor, self.clock).delete(memo_id)

    # Comments

    async def list_comments(self, token: str | None, memo_id: str) -> Result[list[Comment]]:
        auth = await self.policy.authorize(Operation.LIST_COMMENTS, token)
        if not auth.ok:
            return Result.failure(auth.error)
        return await CommentRepository(auth.value.accessor, clock=self.clock).list(memo_id)

    async def create_comment(
        self, token: str | None, memo_id: str, content: str | None
    ) -> Result[Comment]:
        auth = await self.policy.authorize(Operation.CREATE_COMMENT, token)
        if not auth.ok:
            return Result.failure(auth.error)
        ctx = auth.value
        repo = CommentRepository(ctx.accessor, self.resolver, self.clock)
        return await repo.create(memo_id, content, ctx.identity)

    async def delete_comment(self, token: str | None, comment_id: str) -> Result[int]:
        auth = await self.policy.authorize(Operation.DELETE_COMMENT, token)
        if not auth.ok:
            return Result.failure(auth.error)
        return await CommentRepository(auth.value.accessor, clock=self.clock).delete(comment_id)
