"""Shared database fixtures for integration tests.

Tests run against an in-memory SQLite database by default. Tests marked
``integration`` use PostgreSQL from TEST_DATABASE_URL instead and are
auto-skipped unless enabled (see the root conftest).
"""

import os

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool, StaticPool

from hms.infrastructure.persistence.sqlalchemy.models import Base

SQLITE_TEST_URL = "sqlite+aiosqlite:///:memory:"


def _build_postgres_url() -> str:
    """Build PostgreSQL URL from environment variables."""
    if url := os.environ.get("TEST_DATABASE_URL"):
        return url

    host = os.environ.get("POSTGRES_HOST", "localhost")
    port = os.environ.get("POSTGRES_PORT", "5432")
    user = os.environ.get("POSTGRES_USER", "hms")
    password = os.environ.get("POSTGRES_PASSWORD", "hms_secret")
    db = os.environ.get("POSTGRES_DB", "hms_test")

    return f"postgresql+asyncpg://{user}:{password}@{host}:{port}/{db}"


@pytest.fixture
async def db_engine(request):
    """Create a fresh database with all tables.

    Uses PostgreSQL when the requesting test is marked ``integration``.
    """
    if request.node.get_closest_marker("integration"):
        engine = create_async_engine(_build_postgres_url(), poolclass=NullPool)
    else:
        engine = create_async_engine(SQLITE_TEST_URL, poolclass=StaticPool)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def db_session_maker(db_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(db_session_maker):
    """Database session that is rolled back after the test."""
    async with db_session_maker() as session:
        yield session
        await session.rollback()
