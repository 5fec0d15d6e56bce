"""
Authorization policy.

Decides per operation whether a token and a resolved identity are
required. Evaluated strictly before the repository call it guards, so a
rejected request has no side effects.

Deletes only require authentication: any signed-in caller may delete any
memo or comment by id. Ownership is recorded but not checked.
"""

from dataclasses import dataclass
from enum import Enum

from memoboard.auth.identity import IdentityResolver
from memoboard.core.errors import AuthenticationError, ConfigurationError
from memoboard.core.logging import get_logger
from memoboard.core.result import Result
from memoboard.core.types import Identity
from memoboard.store.base import StoreAccessor
from memoboard.store.factory import AccessorFactory, Unconfigured

logger = get_logger("auth.policy")


class Operation(Enum):
    LIST_MEMOS = "list_memos"
    CREATE_MEMO = "create_memo"
    DELETE_MEMO = "delete_memo"
    LIST_COMMENTS = "list_comments"
    CREATE_COMMENT = "create_comment"
    DELETE_COMMENT = "delete_comment"


@dataclass(frozen=True)
class Requirement:
    requires_token: bool
    requires_identity: bool


READ = Requirement(requires_token=False, requires_identity=False)
WRITE = Requirement(requires_token=True, requires_identity=True)

# create_comment additionally needs its target memo to exist; that check
# is done by CommentRepository against the store.
POLICY: dict[Operation, Requirement] = {
    Operation.LIST_MEMOS: READ,
    Operation.LIST_COMMENTS: READ,
    Operation.CREATE_MEMO: WRITE,
    Operation.CREATE_COMMENT: WRITE,
    Operation.DELETE_MEMO: WRITE,
    Operation.DELETE_COMMENT: WRITE,
}


@dataclass
class RequestContext:
    """What an authorized request may use: its accessor and, for writes, its identity."""

    accessor: StoreAccessor
    identity: Identity | None = None


class AuthorizationPolicy:
    """Gate between an inbound token and a repository operation."""

    def __init__(
        self,
        factory: AccessorFactory,
        resolver: IdentityResolver | None = None,
        allow_anonymous_writes: bool = False,
    ):
        self.factory = factory
        self.resolver = resolver or IdentityResolver()
        self.allow_anonymous_writes = allow_anonymous_writes

    async def authorize(self, operation: Operation, token: str | None) -> Result[RequestContext]:
        requirement = POLICY[operation]

        if requirement.requires_token and not token and not self.allow_anonymous_writes:
            logger.info(f"Rejected {operation.value}: no credential")
            return Result.failure(AuthenticationError("Authentication required"))

        accessor = self.factory.scoped(token)
        if isinstance(accessor, Unconfigured):
            logger.error(f"Cannot {operation.value}: {accessor.reason}")
            return Result.failure(ConfigurationError("Data store is unavailable"))

        identity = None
        if requirement.requires_identity and token:
            resolved = await self.resolver.resolve(accessor)
            if not resolved.ok:
                return Result.failure(resolved.error)
            identity = resolved.value

        return Result.success(RequestContext(accessor=accessor, identity=identity))
