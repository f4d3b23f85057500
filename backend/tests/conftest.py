"""
Roster Backend — Test Configuration (conftest.py)
==================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every test gets a fresh in-memory SQLite database (aiosqlite, StaticPool
       so all sessions share the one connection). No external database needed.

Fixture Hierarchy (all function-scoped):
    db_engine
    ├── db_session      → repository
    └── test_client     (HTTPX AsyncClient against create_app(engine=db_engine))
"""

import os

# Override settings BEFORE any roster imports
# Why: roster.database builds its default engine at import time
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["CORS_ORIGINS"] = "*"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from roster.database import build_session_factory, create_tables
from roster.repositories.user_repository import UserRepository


@pytest_asyncio.fixture
async def db_engine():
    """In-memory database with the users table already created."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine):
    session_factory = build_session_factory(db_engine)
    async with session_factory() as session:
        yield session


@pytest.fixture
def repository(db_session):
    return UserRepository(db_session)


@pytest.fixture
def sample_user_data():
    return {"name": "Alice", "email": "alice@x.com"}


@pytest.fixture
def app(db_engine):
    from roster.main import create_app
    return create_app(engine=db_engine)


@pytest_asyncio.fixture
async def test_client(app):
    """
    HTTPX AsyncClient routed straight into the app, without a server or lifespan.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/api/users")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
