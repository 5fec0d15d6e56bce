"""API module - FastAPI application factory."""

from memoboard.api.app import create_app

__all__ = ["create_app"]
