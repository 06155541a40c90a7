from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core import db, errors
from core.log import configure_logging
from core.settings import Settings, cors_origins
from likes.router import router as likes_router
from tweets.router import router as tweets_router

logger = logging.getLogger(__name__)


def _error_response(exc: errors.ServiceError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.kind, "detail": exc.message},
    )


async def _service_error_handler(request: Request, exc: errors.ServiceError) -> JSONResponse:
    if exc.status_code >= 500:
        # The cause carries backend detail; it is logged, never returned.
        logger.error(
            "request_failed method=%s path=%s kind=%s cause=%r",
            request.method,
            request.url.path,
            exc.kind,
            exc.__cause__,
        )
    else:
        logger.info(
            "request_rejected method=%s path=%s kind=%s detail=%s",
            request.method,
            request.url.path,
            exc.kind,
            exc.message,
        )
    return _error_response(exc)


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("request_invalid method=%s path=%s errors=%s", request.method, request.url.path, exc.errors())
    return _error_response(errors.ValidationError("Request body is invalid."))


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the API app.

    `settings` defaults to `Settings.from_env()`, resolved when the lifespan
    starts so that importing this module does not require DATABASE_URL.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        resolved = settings or Settings.from_env()
        configure_logging(resolved.log_level)
        app.state.settings = resolved
        # One pool per process, handed to handlers through app state.
        pool = await db.create_pool(resolved)
        app.state.database = db.Database(pool, acquire_timeout_s=resolved.acquire_timeout_s)
        logger.info(
            "pool_opened min_size=%s max_size=%s",
            resolved.pool_min_size,
            resolved.pool_max_size,
        )
        try:
            yield
        finally:
            await app.state.database.close()
            app.state.database = None
            logger.info("pool_closed")

    app = FastAPI(title="tweets-api", lifespan=lifespan)
    app.state.settings = settings
    app.state.database = None

    # Allow local frontend dev server to call this API from the browser.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins if settings is not None else cors_origins()),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(errors.ServiceError, _service_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)

    app.include_router(tweets_router, tags=["tweets"])
    app.include_router(likes_router, tags=["likes"])

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    return app


app = create_app()


def run() -> None:
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
