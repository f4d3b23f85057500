"""
Roster Backend — Database Session Management
=============================================

What:  Async SQLAlchemy engine, session factory, declarative base, and the
       FastAPI session dependency.
Why:   Centralizes all database connection logic in one place.
How:   Creates an async engine at import from `settings.database_url`. The app
       factory may be handed a different engine; whichever engine it receives
       is stored on `app.state` together with its session factory, and the
       request dependency reads from there.
Who:   Used by the app factory, the health probe, and route handlers via Depends().

Connection Pooling Strategy (server databases):
    pool_size=20:      Persistent connections for normal load
    max_overflow=10:   Temporary connections for traffic spikes (total max = 30)
    pool_pre_ping:     Validates connections before use (catches stale connections)
    pool_recycle=3600: Recycles connections every hour

    SQLite URLs skip these arguments; SQLAlchemy chooses a pool suited to the
    file or in-memory database itself.
"""

from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from roster.config import settings


def build_engine(database_url: str) -> AsyncEngine:
    """
    Create an async engine for the given URL.

    Pool arguments are only passed for server databases; SQLite's pool
    classes reject them.
    """
    # Echo SQL queries in DEBUG mode for development visibility
    echo = settings.log_level == "DEBUG"

    if database_url.startswith("sqlite"):
        return create_async_engine(database_url, echo=echo)

    return create_async_engine(
        database_url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=settings.db_pool_pre_ping,
        pool_recycle=3600,
        echo=echo,
    )


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Session factory bound to `bind`.

    expire_on_commit=False: handlers commit before the response is
    serialized, so attributes must stay loaded after commit.
    """
    return async_sessionmaker(bind, class_=AsyncSession, expire_on_commit=False)


# ── Default Engine & Session Factory ──────────────────────────────────────
engine = build_engine(settings.database_url)
async_session_factory = build_session_factory(engine)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object, which `create_tables()` uses to emit DDL.
    """
    pass


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory stored on app.state
        2. Yields it to the route handler
        3. On success: commits the transaction
        4. On error: rolls back the transaction and re-raises
        5. Always: closes the session (returns connection to pool)

    Handlers that write call commit() themselves before returning. Newer
    FastAPI releases run the code after `yield` once the response has been
    sent, so the commit here only finalizes read-only requests.

    Raises:
        Any exception from the handler or from commit is propagated to the
        global exception handlers after rollback.
    """
    session_factory: async_sessionmaker[AsyncSession] = request.app.state.session_factory
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def create_tables(bind: AsyncEngine) -> None:
    """
    What:  Creates every table registered on Base.metadata that does not exist yet.
    When:  Called during startup when `create_tables_on_startup` is enabled,
           and by the test suite against its in-memory database.
    """
    # Import models so they register with Base.metadata
    from roster.models import user  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine(bind: AsyncEngine) -> None:
    """
    What:  Gracefully closes all connections in the pool.
    When:  Called during application shutdown (lifespan handler).
    """
    await bind.dispose()
