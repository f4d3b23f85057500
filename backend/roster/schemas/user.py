"""
Roster Backend — Pydantic Request/Response Schemas
===================================================

What:  Pydantic models defining the API contract.
How:   FastAPI validates request bodies against these, serializes responses
       through them, and builds the OpenAPI document from them.

Schemas are kept apart from the SQLAlchemy model so the wire shape
({id, name, email}) is stated explicitly rather than derived from columns.
"""

from typing import Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class UserCreate(BaseModel):
    """
    Body of POST /api/users.

    Any `id` sent by the client is ignored; the database assigns it.
    Only presence and type are checked here. Email uniqueness is the one
    business rule, and it is enforced by the handler and the database.
    """
    name: str = Field(description="Display name")
    email: str = Field(description="Email address, unique across all users")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class UserResponse(BaseModel):
    """A stored user, as returned by list, create and get-by-id."""
    id: int = Field(description="Database-assigned identifier")
    name: str = Field(description="Display name")
    email: str = Field(description="Email address")

    model_config = {"from_attributes": True}


class ErrorResponse(BaseModel):
    """
    Standardized error body for application errors.

    Example:
        {
            "error": "validation_error",
            "message": "A user with email 'alice@x.com' already exists",
            "details": {"field": "email"},
            "request_id": "1a2b3c4d"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")
