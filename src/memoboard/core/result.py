"""Explicit success/failure return type for core operations."""

from dataclasses import dataclass
from typing import Generic, TypeVar

from memoboard.core.errors import MemoboardError

T = TypeVar("T")


@dataclass
class Result(Generic[T]):
    """Outcome of a repository, resolver or policy call.

    Exactly one of `value` / `error` is meaningful: check `ok` first.
    """

    value: T | None = None
    error: MemoboardError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: MemoboardError) -> "Result[T]":
        return cls(error=error)
