"""Shared typing aliases used across modules."""

from typing import Any, TypeAlias

JSONDict: TypeAlias = dict[str, Any]
Record: TypeAlias = dict[str, Any]
Filters: TypeAlias = dict[str, str]
