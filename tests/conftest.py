"""Pytest fixtures for API integration tests against an in-memory SQLite database."""

from collections.abc import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from src.app import app
from src.database.base import Base
from src.database.engine import enable_sqlite_foreign_keys
from src.database.session import get_db
from support import SeededTenant, db_override, seed_tenant


@pytest_asyncio.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Fresh in-memory database per test, shared by every session through a StaticPool."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture
async def async_client(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncClient, None]:
    """Yield an httpx AsyncClient wired to the FastAPI app with a test database."""
    app.dependency_overrides[get_db] = db_override(session_factory)

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def acme(session_factory: async_sessionmaker[AsyncSession]) -> SeededTenant:
    return await seed_tenant(session_factory, "acme")


@pytest_asyncio.fixture
async def globex(session_factory: async_sessionmaker[AsyncSession]) -> SeededTenant:
    return await seed_tenant(session_factory, "globex")
