from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from messaging_service.api.middleware.correlation_id import CorrelationIdMiddleware
from messaging_service.api.middleware.metrics import RequestTimingMiddleware
from messaging_service.api.v1.routers import auth, health, messages, users
from messaging_service.application.exceptions import (
    AppError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    StorageError,
    UnauthorizedError,
    ValidationError,
)
from messaging_service.config import settings
from messaging_service.infrastructure.db.session import engine

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: dict[type[AppError], int] = {
    ValidationError: 422,
    UnauthorizedError: 401,
    ForbiddenError: 403,
    NotFoundError: 404,
    ConflictError: 409,
    StorageError: 500,
}

_KIND_BY_STATUS: dict[int, str] = {
    401: UnauthorizedError.code,
    403: ForbiddenError.code,
    404: NotFoundError.code,
    409: ConflictError.code,
    422: ValidationError.code,
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup / shutdown lifecycle."""
    logger.info("Messaging service starting")

    yield

    await engine.dispose()
    logger.info("Database connection pool closed")


def create_app() -> FastAPI:
    app = FastAPI(
        title="Direct Messaging Service",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestTimingMiddleware)
    app.add_middleware(CorrelationIdMiddleware)

    _register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(messages.router)

    return app


def _error_response(exc: AppError) -> JSONResponse:
    status_code = _STATUS_BY_ERROR.get(type(exc), 500)
    return JSONResponse(
        status_code=status_code,
        content={"error": exc.code, "detail": exc.detail},
    )


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(StorageError)
    async def _storage(_req: Request, exc: StorageError) -> JSONResponse:
        logger.error("Storage failure: %s", exc.detail, exc_info=exc.__cause__)
        return JSONResponse(
            status_code=500,
            content={"error": exc.code, "detail": "Storage is unavailable, try again later"},
        )

    @app.exception_handler(AppError)
    async def _app_error(_req: Request, exc: AppError) -> JSONResponse:
        return _error_response(exc)

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(_req: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": _KIND_BY_STATUS.get(exc.status_code, "http_error"),
                "detail": str(exc.detail),
            },
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def _request_validation(_req: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={
                "error": ValidationError.code,
                "detail": _describe_validation_errors(exc),
            },
        )


def _describe_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        location = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        msg = err.get("msg", "invalid value")
        parts.append(f"{location}: {msg}" if location else msg)
    return "; ".join(parts) or "Invalid request"
