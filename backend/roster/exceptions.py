"""
Roster Backend — Custom Exception Hierarchy
============================================

What:  Application-specific exceptions for the outcomes a client can cause.
Why:   Handlers raise these instead of building error responses by hand; global
       exception handlers (registered in main.py) turn them into JSON responses
       with the right status code.
How:   Each exception carries a user-facing message and an optional context dict.

Exception Hierarchy:
    RosterError (base)           → 500 Internal Server Error
    ├── ValidationError          → 400 Bad Request
    │   └── DuplicateEmailError  → 400 Bad Request (email already registered)
    └── NotFoundError            → 404 Not Found

Storage failures (lost connections, unexpected constraint violations) are not
wrapped; they reach the catch-all handler and become a generic 500.
"""

from typing import Any, Dict, Optional


class RosterError(Exception):
    """
    Base exception for all Roster application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional info returned as `details` for client errors
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(RosterError):
    """
    Raised when a request is well-formed but cannot be accepted.

    HTTP: 400 Bad Request. Schema-level problems (missing fields, wrong types)
    are rejected earlier by FastAPI with 422.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class DuplicateEmailError(ValidationError):
    """
    Raised when a user is created with an email that is already registered.

    Raised both by the pre-insert lookup and when the storage-level UNIQUE
    constraint rejects a concurrent duplicate.
    """

    def __init__(self, email: str):
        super().__init__(
            message=f"A user with email '{email}' already exists",
            field="email",
        )
        self.email = email


class NotFoundError(RosterError):
    """
    Raised when a requested resource does not exist.

    HTTP: 404 Not Found. The repository returns None for missing rows; the
    handler converts that None into this exception.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
