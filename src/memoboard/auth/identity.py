"""Identity resolution for write requests."""

from memoboard.core.errors import AuthenticationError
from memoboard.core.logging import get_logger
from memoboard.core.result import Result
from memoboard.core.types import Identity
from memoboard.store.base import StoreAccessor, StoreAuthError, StoreError

logger = get_logger("auth.identity")


class IdentityResolver:
    """Asks the store who a scoped accessor's credential belongs to.

    Called once per write request. Results are never cached: tokens can be
    short-lived or revoked between requests.
    """

    async def resolve(self, accessor: StoreAccessor) -> Result[Identity]:
        try:
            identity = await accessor.get_user()
        except StoreAuthError as e:
            logger.warning(f"Credential rejected: {e}")
            return Result.failure(AuthenticationError("Invalid or expired token"))
        except StoreError as e:
            logger.error(f"Identity lookup failed: {e}")
            return Result.failure(AuthenticationError("Could not verify credentials"))

        logger.debug(f"Resolved identity {identity.id}")
        return Result.success(identity)
