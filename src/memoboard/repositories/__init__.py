"""Repositories - per-entity CRUD against the store."""

from memoboard.repositories.comments import CommentRepository
from memoboard.repositories.memos import MemoRepository

__all__ = ["CommentRepository", "MemoRepository"]
