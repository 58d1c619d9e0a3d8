"""
Blog API: Test Configuration (conftest.py)
=============================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Every test gets its own throwaway SQLite database, so tests never
       share state and never need a running PostgreSQL server.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── db_engine:        async engine on tmp_path/blog.db with tables created
    ├── session_factory:  async_sessionmaker bound to db_engine
    ├── db_session:       one AsyncSession for service-level tests
    ├── mock_db_session:  AsyncMock session for store-failure paths
    ├── sample_post_data: valid request body
    └── test_client:      HTTPX AsyncClient with get_db_session overridden
"""

import os

# Override settings for testing BEFORE any blog_api imports
# Why: settings are read once at import time. The module engine only
# serves /health, so an in-memory database leaves nothing on disk.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_LEVEL"] = "WARNING"

from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from blog_api.database import Base, get_db_session
from blog_api.models.post import Post  # noqa: F401  (registers the posts table)


@pytest_asyncio.fixture
async def db_engine(tmp_path):
    """
    Provides an ephemeral store for one test.

    What:    Async SQLite engine on a file inside pytest's tmp_path.
    Why:     Isolates each test; the file disappears with tmp_path.
    """
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'blog.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.side_effect = OperationalError(...)
        with pytest.raises(DatabaseError):
            await post_service.list_posts(mock_db_session)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.delete = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sample_post_data():
    return {
        "title": "Test Post",
        "content": "This is a test post",
        "category": "Testing",
        "tags": ["test", "api"],
    }


@pytest_asyncio.fixture
async def test_client(session_factory):
    """
    Provides an async HTTP test client for endpoint testing.

    What:    HTTPX AsyncClient talking to the FastAPI app through ASGITransport.
    How:     get_db_session is overridden with sessions from this test's
             engine, rolling back on error like the real dependency.
             raise_app_exceptions=False lets tests inspect 500 responses.

    Usage:
        async def test_welcome(test_client):
            response = await test_client.get("/")
            assert response.status_code == 200
    """
    from blog_api.main import app

    async def override_get_db_session():
        async with session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
