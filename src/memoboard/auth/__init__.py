"""
Auth module - who is calling and what they may do.

Components:
- token: Bearer token extraction
- identity: Token -> identity resolution via the store
- policy: Per-operation authorization gate
"""

from memoboard.auth.identity import IdentityResolver
from memoboard.auth.policy import AuthorizationPolicy, Operation, RequestContext
from memoboard.auth.token import extract_bearer_token

__all__ = [
    "AuthorizationPolicy",
    "IdentityResolver",
    "Operation",
    "RequestContext",
    "extract_bearer_token",
]
