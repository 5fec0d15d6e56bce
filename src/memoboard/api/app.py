"""HTTP API - thin dispatch from routes to NotesService."""

import time
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from memoboard import __version__
from memoboard.auth.token import extract_bearer_token
from memoboard.core.config import Settings, get_settings
from memoboard.core.logging import get_logger
from memoboard.core.result import Result
from memoboard.core.types import utc_now
from memoboard.core.typing import JSONDict
from memoboard.service import NotesService
from memoboard.store.factory import AccessorFactory

logger = get_logger("api")


class ContentPayload(BaseModel):
    """Body of create-memo / create-comment. Only content is accepted from clients."""

    content: str | None = None


def error_response(status_code: int, message: str, **extra: Any) -> JSONResponse:
    return JSONResponse({"error": message, **extra}, status_code=status_code)


def respond(result: Result, build: Callable[[Any], JSONDict], status_code: int = 200) -> JSONResponse:
    """Map a core Result onto the response envelope."""
    if not result.ok:
        return error_response(result.error.status_code, result.error.message)
    return JSONResponse(build(result.value), status_code=status_code)


def bearer_token(request: Request) -> str | None:
    return extract_bearer_token(request.headers)


def get_service(request: Request) -> NotesService:
    return request.app.state.service


def create_app(
    settings: Settings | None = None,
    factory: AccessorFactory | None = None,
    clock: Callable[[], datetime] = utc_now,
) -> FastAPI:
    """Build the application. The factory's default accessor is created on startup."""
    settings = settings or get_settings()
    factory = factory or AccessorFactory.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        await factory.start()
        app.state.started_at = time.monotonic()
        logger.info(f"Memoboard API started (environment={settings.environment})")
        try:
            yield
        finally:
            await factory.close()
            logger.info("Memoboard API stopped")

    app = FastAPI(title="Memoboard", version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.service = NotesService(factory, settings.allow_anonymous_writes, clock)

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            return error_response(404, "Route not found", path=request.url.path)
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def invalid_body(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.info(f"Invalid request body on {request.method} {request.url.path}: {exc.errors()}")
        return error_response(400, "Invalid request body")

    @app.get("/")
    async def index() -> JSONDict:
        return {
            "message": "Memoboard API",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "framework": "FastAPI",
        }

    @app.get("/api/status")
    async def api_status(request: Request) -> JSONDict:
        return {
            "status": "OK",
            "uptime": time.monotonic() - request.app.state.started_at,
            "environment": settings.environment,
        }

    # Memos

    @app.get("/api/memos")
    async def list_memos(
        token: str | None = Depends(bearer_token),
        service: NotesService = Depends(get_service),
    ) -> JSONResponse:
        result = await service.list_memos(token)
        return respond(result, lambda memos: {"memos": [m.to_dict() for m in memos]})

    @app.post("/api/memos")
    async def create_memo(
        payload: ContentPayload | None = None,
        token: str | None = Depends(bearer_token),
        service: NotesService = Depends(get_service),
    ) -> JSONResponse:
        content = payload.content if payload else None
        result = await service.create_memo(token, content)
        return respond(
            result,
            lambda memo: {"success": True, "memo": memo.to_dict()},
            status_code=status.HTTP_201_CREATED,
        )

    @app.delete("/api/memos/{memo_id}")
    async def delete_memo(
        memo_id: str,
        token: str | None = Depends(bearer_token),
        service: NotesService = Depends(get_service),
    ) -> JSONResponse:
        result = await service.delete_memo(token, memo_id)
        return respond(result, lambda _: {"success": True, "message": "Memo deleted"})

    # Comments

    @app.get("/api/memos/{memo_id}/comments")
    async def list_comments(
        memo_id: str,
        token: str | None = Depends(bearer_token),
        service: NotesService = Depends(get_service),
    ) -> JSONResponse:
        result = await service.list_comments(token, memo_id)
        return respond(result, lambda comments: {"comments": [c.to_dict() for c in comments]})

    @app.post("/api/memos/{memo_id}/comments")
    async def create_comment(
        memo_id: str,
        payload: ContentPayload | None = None,
        token: str | None = Depends(bearer_token),
        service: NotesService = Depends(get_service),
    ) -> JSONResponse:
        content = payload.content if payload else None
        result = await service.create_comment(token, memo_id, content)
        return respond(
            result,
            lambda comment: {"success": True, "comment": comment.to_dict()},
            status_code=status.HTTP_201_CREATED,
        )

    @app.delete("/api/comments/{comment_id}")
    async def delete_comment(
        comment_id: str,
        token: str | None = Depends(bearer_token),
        service: NotesService = Depends(get_service),
    ) -> JSONResponse:
        result = await service.delete_comment(token, comment_id)
        return respond(result, lambda _: {"success": True, "message": "Comment deleted"})

    return app
