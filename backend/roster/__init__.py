"""
Roster Backend — Application Package Initializer
=================================================

What: Marks the `roster` directory as a Python package.
Who:  Imported by uvicorn (`roster.main:app`), pytest, and the `roster` console script.

Architecture Note:
    The service is deliberately thin. Three pieces talk to each other directly:

    ┌─────────────────────────────────────┐
    │        Routes (HTTP Handlers)       │  ← status codes, JSON bodies
    ├─────────────────────────────────────┤
    │      Repositories (Persistence)     │  ← CRUD + lookup-by-email
    ├─────────────────────────────────────┤
    │     Models & Schemas (Entity)       │  ← SQLAlchemy ORM + Pydantic
    └─────────────────────────────────────┘

    Configuration, database wiring, middleware and error handling sit around
    these three and are shared by all of them.
"""

__version__ = "1.0.0"
