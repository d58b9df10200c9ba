# lesson_index/api/main.py
"""FastAPI application entry point."""

import logging
import uuid
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import anyio
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from ..config import Config
from ..exceptions import ContentRootError
from ..loader import get_content_index
from .dependencies import get_config_sync, cleanup_dependencies
from .routes import categories, static_params
from .schemas import ErrorResponse

logger = logging.getLogger(__name__)

API_VERSION = "0.1.0"


def create_app(config: Optional[Config] = None, warm_index: bool = True) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Configuration to use; loaded from settings when omitted.
        warm_index: Build the content index during startup instead of on
            the first request.

    Returns:
        Configured FastAPI application instance with routes, middleware, and error handlers.
    """
    config = config or get_config_sync()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Application lifespan manager."""
        # Startup
        if warm_index:
            try:
                index = await anyio.to_thread.run_sync(get_content_index, config)
                logger.info("Serving %r", index)
            except ContentRootError as e:
                logger.warning("Content index unavailable at startup: %s", e)
        yield
        # Shutdown
        cleanup_dependencies()

    app = FastAPI(
        title="Lesson Index API",
        description="Read-only API over the lesson category/topic taxonomy",
        version=API_VERSION,
        lifespan=lifespan,
        debug=config.api.debug,
    )
    app.state.config = config

    @app.exception_handler(ContentRootError)
    async def content_root_handler(request: Request, exc: ContentRootError):
        logger.warning("Content unavailable for %s: %s", request.url.path, exc)
        return JSONResponse(
            status_code=503,
            content=ErrorResponse(error="Content Unavailable", detail=str(exc)).model_dump(),
        )

    # Global Exception Handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        error_id = str(uuid.uuid4())[:8]
        logger.exception("Unhandled exception [%s]: %s", error_id, exc)
        return JSONResponse(
            status_code=500,
            content={"error": "Internal Server Error", "error_id": error_id},
        )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.api.cors_origins,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    app.include_router(categories.router, prefix="/api/categories", tags=["categories"])
    app.include_router(static_params.router, prefix="/api/static-params", tags=["static-params"])

    @app.get("/health", tags=["health"])
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "version": API_VERSION,
        }

    return app
