"""Dependency injection — session and per-resource singletons."""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from softcrud.dao.article_dao import ArticleDAO
from softcrud.managers.article_manager import ArticleManager
from softcrud.services.article_service import ArticleService

DEFAULT_DATABASE_URL = "postgresql+asyncpg://localhost/softcrud"

# ---------------------------------------------------------------------------
# DAO / manager / service singletons
# ---------------------------------------------------------------------------
_article_dao = ArticleDAO()
_article_manager = ArticleManager(_article_dao)
_article_service = ArticleService(_article_dao)

# ---------------------------------------------------------------------------
# Engine / session factory (initialised by app lifespan)
# ---------------------------------------------------------------------------
_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def get_database_url() -> str:
    return os.environ.get("SOFTCRUD_DATABASE_URL", DEFAULT_DATABASE_URL)


def create_engine(database_url: str | None = None) -> AsyncEngine:
    """Build an async engine; pool options only apply to server databases."""
    url = database_url or get_database_url()
    echo = os.environ.get("SOFTCRUD_SQL_ECHO") == "1"
    if url.startswith("sqlite"):
        return create_async_engine(url, echo=echo)
    return create_async_engine(
        url,
        echo=echo,
        pool_pre_ping=True,
        pool_size=10,
        max_overflow=20,
        pool_recycle=1800,
    )


def init_session_factory(database_url: str | None = None) -> async_sessionmaker[AsyncSession]:
    """Create the async engine and session factory. Called once at startup."""
    global _engine, _session_factory  # noqa: PLW0603
    _engine = create_engine(database_url)
    _session_factory = async_sessionmaker(_engine, expire_on_commit=False)
    return _session_factory


async def dispose_engine() -> None:
    """Dispose the async engine, closing all pooled connections."""
    global _engine  # noqa: PLW0603
    if _engine is not None:
        await _engine.dispose()
        _engine = None


def set_session_factory(factory: async_sessionmaker[AsyncSession]) -> None:
    """Override session factory (for testing)."""
    global _session_factory  # noqa: PLW0603
    _session_factory = factory


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield a per-request session with automatic commit/rollback."""
    if _session_factory is None:
        raise RuntimeError("call init_session_factory() before handling requests")
    async with _session_factory() as session:
        async with session.begin():
            yield session


# ---------------------------------------------------------------------------
# Resource getters
# ---------------------------------------------------------------------------


def get_article_manager() -> ArticleManager:
    return _article_manager


def get_article_service() -> ArticleService:
    return _article_service
