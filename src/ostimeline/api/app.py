"""
FastAPI Application Factory & Configuration.

This module initializes the ostimeline HTTP application. It is responsible for:
1.  **Middleware Setup**: CORS so a browser front-end on another origin can call it.
2.  **Exception Handling**: Global handlers so every error comes back as JSON.
3.  **Routing**: Mounting the timeline router and the health probe.
4.  **Lifecycle**: Loading (and validating) the dataset once at startup.

Design Pattern
--------------
We use an **Application Factory** pattern (`create_app`) so tests can build
isolated app instances and override the dataset dependency.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ostimeline import __version__
from ostimeline.api.routers import timeline
from ostimeline.api.schemas import HealthResponse
from ostimeline.core.settings import get_logger, load_settings

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    ASGI Lifespan context manager.

    - **Startup**: Resolve the dataset dependency once so a broken dataset
      file fails the boot instead of the first request.
    - **Shutdown**: Nothing to release; the dataset is read-only.
    """
    logger.info("Starting up...")
    provider = app.dependency_overrides.get(timeline.get_dataset, timeline.get_dataset)
    dataset = provider()
    logger.info("Serving %d entries (%d-%d)", len(dataset), dataset.min_year, dataset.max_year)

    yield

    logger.info("Shutting down...")


def create_app() -> FastAPI:
    """
    Construct and configure the ostimeline FastAPI application.

    Returns
    -------
    FastAPI
        The configured ASGI application ready to be served by Uvicorn.
    """
    app = FastAPI(
        title="OS & Kernel Timeline API",
        description="Filter, search and export a curated timeline of kernels and operating systems",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # -----------------------------------------------------------------------
    # Middleware
    # -----------------------------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
        expose_headers=["Content-Disposition"],
    )

    # -----------------------------------------------------------------------
    # Global Exception Handlers
    # -----------------------------------------------------------------------
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Return unhandled exceptions as structured JSON (HTTP 500)."""
        logger.exception("Unhandled error on %s", request.url.path)
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal Server Error",
                "detail": str(exc),
                "path": request.url.path,
            },
        )

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
        """Map Python ValueErrors (e.g. an unknown facet option) to HTTP 400."""
        return JSONResponse(
            status_code=400,
            content={
                "error": "Bad Request",
                "detail": str(exc),
            },
        )

    # -----------------------------------------------------------------------
    # Routes
    # -----------------------------------------------------------------------
    app.include_router(timeline.router)

    @app.get("/health", tags=["System"], response_model=HealthResponse)
    async def health_check() -> HealthResponse:
        """Simple liveness probe."""
        return HealthResponse(environment=load_settings().environment, version=__version__)

    return app


__all__ = ["create_app"]
