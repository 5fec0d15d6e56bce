"""SQLite store backend for local development and tests.

Implements the same row contract as the REST backend, plus a small
users/sessions table pair so bearer tokens can be issued and resolved
without an external identity service.
"""

import secrets
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from uuid import uuid4

import aiosqlite

from memoboard.core.logging import get_logger
from memoboard.core.types import Identity
from memoboard.core.typing import Filters, Record
from memoboard.store.base import (
    COMMENTS_TABLE,
    MEMOS_TABLE,
    Order,
    StoreAccessor,
    StoreAuthError,
    StoreBackend,
    StoreError,
)

logger = get_logger("store.sqlite")

SCHEMA = """
CREATE TABLE IF NOT EXISTS memos (
    id TEXT PRIMARY KEY,
    content TEXT NOT NULL,
    created_at TEXT NOT NULL,
    user_id TEXT,
    author_email TEXT
);

-- No foreign key on memo_id: existence is checked by the caller
CREATE TABLE IF NOT EXISTS comments (
    id TEXT PRIMARY KEY,
    memo_id TEXT NOT NULL,
    content TEXT NOT NULL,
    created_at TEXT NOT NULL,
    user_id TEXT,
    author_email TEXT
);

CREATE INDEX IF NOT EXISTS idx_comments_memo
    ON comments(memo_id, created_at);

CREATE TABLE IF NOT EXISTS users (
    id TEXT PRIMARY KEY,
    email TEXT NOT NULL UNIQUE,
    created_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS sessions (
    token TEXT PRIMARY KEY,
    user_id TEXT NOT NULL,
    created_at TEXT NOT NULL
);
"""

# Columns callers may write, filter or order by, per table
TABLE_COLUMNS: dict[str, tuple[str, ...]] = {
    MEMOS_TABLE: ("id", "content", "created_at", "user_id", "author_email"),
    COMMENTS_TABLE: ("id", "memo_id", "content", "created_at", "user_id", "author_email"),
}


def _check_columns(table: str, columns: list[str]) -> tuple[str, ...]:
    known = TABLE_COLUMNS.get(table)
    if known is None:
        raise StoreError(f"Unknown table: {table}")
    unknown = [c for c in columns if c not in known]
    if unknown:
        raise StoreError(f"Unknown columns for {table}: {', '.join(unknown)}")
    return known


class SQLiteStore(StoreBackend):
    """SQLite-backed store."""

    def __init__(self, db_path: Path):
        self.db_path = db_path
        self._conn: aiosqlite.Connection | None = None

    async def connect(self) -> None:
        """Initialize database connection and schema."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = await aiosqlite.connect(self.db_path)
        self._conn.row_factory = aiosqlite.Row
        await self._conn.executescript(SCHEMA)
        await self._conn.commit()
        logger.info(f"Connected to store: {self.db_path}")

    async def close(self) -> None:
        """Close database connection."""
        if self._conn:
            await self._conn.close()
            self._conn = None

    @property
    def conn(self) -> aiosqlite.Connection:
        if self._conn is None:
            raise StoreError("Store not connected. Call connect() first.")
        return self._conn

    def accessor(self, token: str | None = None) -> "SQLiteAccessor":
        return SQLiteAccessor(self, token)

    async def health_check(self) -> bool:
        try:
            async with self.conn.execute("SELECT 1") as cursor:
                return await cursor.fetchone() is not None
        except (StoreError, sqlite3.Error) as e:
            logger.warning(f"Store health check failed: {e}")
            return False

    # Row operations

    async def insert(self, table: str, record: Record) -> Record:
        row = {"id": str(uuid4()), **record}
        _check_columns(table, list(row))
        columns = ", ".join(row)
        placeholders = ", ".join("?" for _ in row)
        try:
            await self.conn.execute(
                f"INSERT INTO {table} ({columns}) VALUES ({placeholders})",
                tuple(row.values()),
            )
            await self.conn.commit()
        except sqlite3.Error as e:
            raise StoreError(f"Insert into {table} failed: {e}") from e

        rows = await self.select(table, {"id": row["id"]})
        if not rows:
            raise StoreError(f"Inserted row missing from {table}")
        return rows[0]

    async def select(
        self,
        table: str,
        filters: Filters | None = None,
        order: Order | None = None,
    ) -> list[Record]:
        filters = filters or {}
        referenced = list(filters) + ([order.column] if order else [])
        columns = _check_columns(table, referenced)

        sql = f"SELECT {', '.join(columns)} FROM {table}"
        if filters:
            sql += " WHERE " + " AND ".join(f"{c} = ?" for c in filters)
        if order:
            # rowid keeps insertion order among equal timestamps
            direction = "DESC" if order.descending else "ASC"
            sql += f" ORDER BY {order.column} {direction}, rowid {direction}"

        try:
            async with self.conn.execute(sql, tuple(filters.values())) as cursor:
                return [dict(row) async for row in cursor]
        except sqlite3.Error as e:
            raise StoreError(f"Select from {table} failed: {e}") from e

    async def delete(self, table: str, filters: Filters) -> int:
        if not filters:
            raise StoreError("Refusing to delete without filters")
        _check_columns(table, list(filters))
        sql = f"DELETE FROM {table} WHERE " + " AND ".join(f"{c} = ?" for c in filters)
        try:
            cursor = await self.conn.execute(sql, tuple(filters.values()))
            await self.conn.commit()
        except sqlite3.Error as e:
            raise StoreError(f"Delete from {table} failed: {e}") from e
        return cursor.rowcount

    # Sessions (dev identity service)

    async def create_session(self, email: str) -> str:
        """Issue a bearer token for `email`, creating the user if needed."""
        now = datetime.now(timezone.utc).isoformat()
        await self.conn.execute(
            "INSERT OR IGNORE INTO users (id, email, created_at) VALUES (?, ?, ?)",
            (str(uuid4()), email, now),
        )
        async with self.conn.execute("SELECT id FROM users WHERE email = ?", (email,)) as cursor:
            row = await cursor.fetchone()

        token = secrets.token_urlsafe(32)
        await self.conn.execute(
            "INSERT INTO sessions (token, user_id, created_at) VALUES (?, ?, ?)",
            (token, row["id"], now),
        )
        await self.conn.commit()
        logger.info(f"Issued session for {email}")
        return token

    async def revoke_session(self, token: str) -> bool:
        """Revoke a bearer token. Returns False if it did not exist."""
        cursor = await self.conn.execute("DELETE FROM sessions WHERE token = ?", (token,))
        await self.conn.commit()
        return cursor.rowcount > 0

    async def get_user(self, token: str | None) -> Identity:
        if not token:
            raise StoreAuthError("No credential")
        try:
            async with self.conn.execute(
                """SELECT users.id, users.email FROM sessions
                   JOIN users ON users.id = sessions.user_id
                   WHERE sessions.token = ?""",
                (token,),
            ) as cursor:
                row = await cursor.fetchone()
        except sqlite3.Error as e:
            raise StoreError(f"User lookup failed: {e}") from e

        if row is None:
            raise StoreAuthError("Unknown or revoked session")
        return Identity(id=row["id"], email=row["email"])


class SQLiteAccessor(StoreAccessor):
    """Accessor bound to one session token (or none)."""

    def __init__(self, store: SQLiteStore, token: str | None = None):
        self._store = store
        self.token = token

    async def insert(self, table: str, record: Record) -> Record:
        return await self._store.insert(table, record)

    async def select(
        self,
        table: str,
        filters: Filters | None = None,
        order: Order | None = None,
    ) -> list[Record]:
        return await self._store.select(table, filters, order)

    async def delete(self, table: str, filters: Filters) -> int:
        return await self._store.delete(table, filters)

    async def get_user(self) -> Identity:
        return await self._store.get_user(self.token)
