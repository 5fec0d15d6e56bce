"""
Memoboard - multi-tenant memo and comment API.

Package structure:
- core: config, logging, shared types, error taxonomy
- auth: bearer token extraction, identity resolution, authorization policy
- store: persistence contract and backends (REST, SQLite)
- repositories: memo and comment CRUD over a scoped accessor
- api: HTTP surface (FastAPI)
"""

__version__ = "0.1.0"
