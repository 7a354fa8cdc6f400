"""Shared fixtures for softcrud tests.

DAO, manager, service and API tests run against an in-memory SQLite
database through aiosqlite; every test gets a fresh schema.
"""

import os

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from softcrud.core.database import Base
from softcrud.models.article import Article

DEFAULT_DB_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture(scope="session")
def db_url():
    return os.environ.get("TEST_DATABASE_URL", DEFAULT_DB_URL)


@pytest_asyncio.fixture
async def engine(db_url):
    """Create an engine with all tables; dropped again after the test."""
    eng = create_async_engine(db_url, poolclass=StaticPool)
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await eng.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(session_factory):
    """Provide a session whose work is rolled back after each test."""
    async with session_factory() as sess:
        yield sess
        await sess.rollback()


@pytest.fixture
def make_article(session):
    """Insert an article row directly (bypassing manager and service)."""

    async def _make(title: str = "a", body: str = "", deleted: bool = False) -> Article:
        article = Article(title=title, body=body, deleted=deleted)
        session.add(article)
        await session.flush()
        await session.refresh(article)
        return article

    return _make
