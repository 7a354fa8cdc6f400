"""FastAPI application factory."""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from softcrud import __version__
from softcrud.api.deps import dispose_engine, init_session_factory
from softcrud.api.errors import register_error_handlers
from softcrud.api.middleware.request_id import RequestIDMiddleware
from softcrud.api.routers import articles
from softcrud.core.logging import setup_logging


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: init DB session factory. Shutdown: dispose engine."""
    init_session_factory()
    yield
    await dispose_engine()


def create_app() -> FastAPI:
    """Build and return the FastAPI application.

    Logging already configured by the CLI (e.g. ``softcrud -v serve``) is kept.
    """
    if not structlog.is_configured():
        setup_logging()

    app = FastAPI(
        title="softcrud",
        version=__version__,
        docs_url="/api/v1/docs",
        openapi_url="/api/v1/openapi.json",
        lifespan=_lifespan,
    )

    register_error_handlers(app)

    cors_origins = os.environ.get("SOFTCRUD_CORS_ORIGINS", "http://localhost:3000")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in cors_origins.split(",")],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIDMiddleware)

    @app.get("/health", tags=["ops"])
    async def health() -> JSONResponse:
        return JSONResponse({"status": "ok"})

    app.include_router(articles.router, prefix="/api/v1/articles", tags=["articles"])

    return app
