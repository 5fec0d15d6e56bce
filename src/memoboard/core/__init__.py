"""
Core module - configuration, shared types, errors.

Components:
- config: Settings management via pydantic-settings
- types: Memo, Comment, Identity records
- errors: Error taxonomy mapped to HTTP status codes
- result: Explicit success/failure return type
- logging: Structured logging setup
"""

from memoboard.core.config import Settings
from memoboard.core.errors import MemoboardError
from memoboard.core.result import Result
from memoboard.core.types import Comment, Identity, Memo

__all__ = ["Settings", "MemoboardError", "Result", "Memo", "Comment", "Identity"]
