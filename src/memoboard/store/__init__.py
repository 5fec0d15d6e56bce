"""
Store module - persistence contract and backends.

Backends:
- rest: PostgREST/GoTrue compatible HTTP service
- sqlite: local SQLite database with dev sessions
"""

from memoboard.store.base import (
    COMMENTS_TABLE,
    MEMOS_TABLE,
    Order,
    StoreAccessor,
    StoreAuthError,
    StoreBackend,
    StoreError,
)
from memoboard.store.factory import Accessor, AccessorFactory, Unconfigured

__all__ = [
    "COMMENTS_TABLE",
    "MEMOS_TABLE",
    "Accessor",
    "AccessorFactory",
    "Order",
    "StoreAccessor",
    "StoreAuthError",
    "StoreBackend",
    "StoreError",
    "Unconfigured",
]
