"""
Roster Backend — FastAPI Application Factory
=============================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() returns a configured FastAPI instance. The database engine
       is passed in explicitly (defaulting to the one built from settings) and
       stored on app.state with its session factory; nothing else reaches for
       a global engine.
Who:   uvicorn (`uvicorn roster.main:app`), the `roster` console script, tests.

Application Layout:
    Middleware:        RequestID → Logging → CORS
    Routes:            /api/users, /api/users/{id}, /health
    Exception Handlers:
        ValidationError → 400 │ NotFoundError → 404 │ RosterError → 500 │ Exception → 500

Lifecycle:
    Startup:  configure logging, create missing tables (if enabled)
    Shutdown: dispose the engine (close pooled connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncEngine

from roster import __version__
from roster.config import settings
from roster.database import (
    build_session_factory,
    create_tables,
    dispose_engine,
    engine as default_engine,
)
from roster.exceptions import NotFoundError, RosterError, ValidationError
from roster.middleware.logging import RequestLoggingMiddleware
from roster.middleware.request_id import RequestIDMiddleware, request_id_var
from roster.routes import health, users

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during startup, before anything else logs.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),  # Docker captures stdout
        ],
        force=True,  # Override any existing logging config
    )

    # These log every operation at INFO/DEBUG
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: logging, then table creation when `create_tables_on_startup` is set.
    Shutdown: dispose the engine so the database sees clean disconnects.
    """
    setup_logging()
    logger.info("=" * 60)
    logger.info("Roster Backend starting up...")

    if settings.create_tables_on_startup:
        await create_tables(app.state.engine)
        logger.info("Database tables ensured")

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("Roster Backend shutting down...")
    await dispose_engine(app.state.engine)
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and JSON error bodies.

    Handler hierarchy:
        ValidationError     → 400 Bad Request (DuplicateEmailError included)
        NotFoundError       → 404 Not Found
        RosterError (base)  → 500 Internal Server Error
        Exception           → 500 Internal Server Error (storage failures, bugs)

    500 responses never include exception text; it is logged server-side.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s", rid, exc.message)
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": exc.message,
                "details": exc.context,
                "request_id": rid,
            },
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        rid = request_id_var.get("")
        return JSONResponse(
            status_code=404,
            content={
                "error": "not_found",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(RosterError)
    async def handle_roster_error(request: Request, exc: RosterError):
        rid = request_id_var.get("")
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all: full stack trace in the log, generic message in the response."""
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred. Please try again later.",
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(engine: Optional[AsyncEngine] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        engine: Database engine to serve requests from. Defaults to the engine
                built from `settings.database_url`; tests pass an in-memory one.
    """
    bind = engine if engine is not None else default_engine

    app = FastAPI(
        title="Roster API",
        description="Create, list, fetch and delete users. Emails are unique.",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.engine = bind
    app.state.session_factory = build_session_factory(bind)

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(users.router)
    app.include_router(health.router)

    return app


# uvicorn expects `roster.main:app` to be importable
app = create_app()


def run() -> None:
    """Console entry point: serve `app` on the configured host and port."""
    uvicorn.run(
        "roster.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )
