"""
Shared type definitions.

Records exchanged between repositories, the store and the HTTP layer.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any


def utc_now() -> datetime:
    """Creation timestamp source for new memos and comments."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Identity:
    """Resolved caller identity, used to stamp ownership."""

    id: str
    email: str | None = None


@dataclass
class Memo:
    """A short text note."""

    id: str
    content: str
    created_at: str  # ISO-8601
    user_id: str | None = None
    author_email: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for API responses."""
        return {
            "id": self.id,
            "content": self.content,
            "created_at": self.created_at,
            "user_id": self.user_id,
            "author_email": self.author_email,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Memo":
        """Create from a row returned by the store."""
        return cls(
            id=str(data["id"]),
            content=data["content"],
            created_at=str(data["created_at"]),
            user_id=data.get("user_id"),
            author_email=data.get("author_email"),
        )


@dataclass
class Comment:
    """A comment attached to a memo."""

    id: str
    memo_id: str
    content: str
    created_at: str  # ISO-8601
    user_id: str | None = None
    author_email: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for API responses."""
        return {
            "id": self.id,
            "memo_id": self.memo_id,
            "content": self.content,
            "created_at": self.created_at,
            "user_id": self.user_id,
            "author_email": self.author_email,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Comment":
        """Create from a row returned by the store."""
        return cls(
            id=str(data["id"]),
            memo_id=str(data["memo_id"]),
            content=data["content"],
            created_at=str(data["created_at"]),
            user_id=data.get("user_id"),
            author_email=data.get("author_email"),
        )


def ownership_fields(identity: Identity | None) -> dict[str, Any]:
    """Ownership columns for a new row. Empty in anonymous mode."""
    if identity is None:
        return {}
    return {"user_id": identity.id, "author_email": identity.email}
