"""
Store accessor interface.

The external store is opaque: rows go in and out of named tables with
equality filters and single-column ordering, and a token-bound accessor
can ask who its credential belongs to.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from memoboard.core.types import Identity
from memoboard.core.typing import Filters, Record

MEMOS_TABLE = "memos"
COMMENTS_TABLE = "comments"


class StoreError(Exception):
    """Store failed to complete a request."""


class StoreAuthError(StoreError):
    """Store rejected the credential or knows no user for it."""


@dataclass(frozen=True)
class Order:
    """Single-column ordering."""

    column: str
    descending: bool = False


class StoreAccessor(ABC):
    """Handle to the store carrying one caller's credential context.

    An accessor without a token is the anonymous/service-level handle.
    """

    token: str | None = None

    @abstractmethod
    async def insert(self, table: str, record: Record) -> Record:
        """Insert a row, return it as persisted (with store-assigned id)."""
        ...

    @abstractmethod
    async def select(
        self,
        table: str,
        filters: Filters | None = None,
        order: Order | None = None,
    ) -> list[Record]:
        """Select rows matching all equality filters."""
        ...

    @abstractmethod
    async def delete(self, table: str, filters: Filters) -> int:
        """Delete rows matching all equality filters, return affected count."""
        ...

    @abstractmethod
    async def get_user(self) -> Identity:
        """Resolve the identity behind this accessor's credential.

        Raises:
            StoreAuthError: no credential, or the store rejects it
            StoreError: the store could not be asked
        """
        ...


class StoreBackend(ABC):
    """Process-wide connection to a store, producing accessors."""

    @abstractmethod
    async def connect(self) -> None:
        """Open connections / prepare schema."""
        ...

    @abstractmethod
    async def close(self) -> None:
        """Release connections."""
        ...

    @abstractmethod
    def accessor(self, token: str | None = None) -> StoreAccessor:
        """Build an accessor bound to `token`, or the anonymous one."""
        ...

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the store is reachable."""
        ...
