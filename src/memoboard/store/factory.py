"""Scoped accessor factory."""

from dataclasses import dataclass
from typing import TypeAlias

from memoboard.core.config import Settings
from memoboard.core.logging import get_logger
from memoboard.store.base import StoreAccessor, StoreBackend
from memoboard.store.rest import RestStore
from memoboard.store.sqlite import SQLiteStore

logger = get_logger("store.factory")


@dataclass(frozen=True)
class Unconfigured:
    """No store available; callers must surface a configuration failure."""

    reason: str = "Store is not configured"


Accessor: TypeAlias = StoreAccessor | Unconfigured


def build_backend(settings: Settings) -> StoreBackend | None:
    """Build the configured backend, or None when nothing is configured."""
    if not settings.store_configured:
        logger.warning(f"Store not configured (backend={settings.store_backend!r})")
        return None
    if settings.store_backend == "sqlite":
        return SQLiteStore(settings.db_path)
    return RestStore(settings.store_url, settings.store_key, timeout=settings.store_timeout)


class AccessorFactory:
    """Turns an optional bearer token into a store accessor.

    The anonymous accessor is built once in start() and shared read-only.
    Token-bound accessors are built fresh on every call and never cached.
    """

    def __init__(self, backend: StoreBackend | None):
        self.backend = backend
        self._default: StoreAccessor | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "AccessorFactory":
        return cls(build_backend(settings))

    @property
    def configured(self) -> bool:
        return self.backend is not None

    async def start(self) -> None:
        if self.backend is None:
            return
        await self.backend.connect()
        self._default = self.backend.accessor(None)

    async def close(self) -> None:
        if self.backend is not None:
            await self.backend.close()
        self._default = None

    def anonymous(self) -> Accessor:
        """The shared service-level accessor for reads."""
        if self._default is None:
            return Unconfigured()
        return self._default

    def for_token(self, token: str) -> Accessor:
        """A new accessor carrying `token`."""
        if self.backend is None or self._default is None:
            return Unconfigured()
        return self.backend.accessor(token)

    def scoped(self, token: str | None) -> Accessor:
        """Token-bound accessor when a token is present, anonymous otherwise."""
        if token:
            return self.for_token(token)
        return self.anonymous()
