"""FastAPI application factory.

The Database handle is created in the lifespan (or injected by the caller)
and kept on ``app.state``; handlers reach it through ``get_database``.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from guestdesk.config import Settings, load_settings
from guestdesk.infra.db import Database
from guestdesk.observability.correlation import CORRELATION_ID_HEADER, bound_correlation_id
from guestdesk.observability.logging import get_logger, set_log_level
from guestdesk.observability.redaction import safe_log_context

from .responses import failure
from .routes import bonuses, guests, root

logger = get_logger(__name__)


def create_app(
    settings: Settings | None = None,
    database: Database | None = None,
) -> FastAPI:
    """Create the FastAPI app.

    Args:
        settings: Explicit settings. If None, read from the environment.
        database: Pre-built Database handle. If None, one is opened from
                  ``settings`` at startup and closed at shutdown.

    Returns:
        Configured FastAPI application.
    """
    if settings is None:
        settings = load_settings()
    set_log_level(settings.debug)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        owns_db = database is None
        app.state.db = database if database is not None else Database.open(settings)
        logger.info(
            "server started",
            extra={
                "extra_fields": {
                    "port": settings.port,
                    "health_url": f"http://localhost:{settings.port}/health",
                }
            },
        )
        try:
            yield
        finally:
            if owns_db:
                app.state.db.close()

    app = FastAPI(
        title="Hotel Guests API",
        docs_url="/docs" if settings.debug else None,
        redoc_url=None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    if database is not None:
        app.state.db = database

    def unhandled_error(request: Request, exc: Exception) -> Response:
        logger.error(
            "unhandled error",
            exc_info=exc,
            extra={"extra_fields": {"path": request.url.path}},
        )
        return failure(
            500,
            "Internal server error",
            error=str(exc) if settings.debug else None,
        )

    # Correlation ID middleware. Unhandled errors are answered here, so the
    # 500 carries the correlation and CORS headers and its log line the ID.
    @app.middleware("http")
    async def correlation_id_middleware(request: Request, call_next) -> Response:
        with bound_correlation_id(request.headers.get(CORRELATION_ID_HEADER)) as cid:
            try:
                response = await call_next(request)
            except Exception as exc:
                response = unhandled_error(request, exc)
            response.headers[CORRELATION_ID_HEADER] = cid
            return response

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[CORRELATION_ID_HEADER],
    )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> Response:
        # Unknown paths and unsupported methods share one envelope
        if exc.status_code in (404, 405):
            return failure(404, "Route not found")
        return failure(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> Response:
        logger.warning(
            "unreadable request",
            extra={
                "extra_fields": safe_log_context(path=request.url.path, errors=len(exc.errors()))
            },
        )
        return failure(400, "Invalid request body")

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> Response:
        return unhandled_error(request, exc)

    app.include_router(root.router)
    app.include_router(guests.router)
    app.include_router(bonuses.router)

    return app
