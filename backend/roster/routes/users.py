"""
Roster Backend — User Route Handlers
=====================================

What:  The four user operations:
           GET    /api/users         list every user
           POST   /api/users         create a user (email must be unused)
           GET    /api/users/{id}    fetch one user
           DELETE /api/users/{id}    remove one user
How:   Each handler receives a UserRepository bound to the request's session,
       performs one lookup and at most one write, and either returns the
       user(s) or raises an application exception that main.py maps to a
       status code.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Response
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from roster.database import get_db_session
from roster.exceptions import DuplicateEmailError, NotFoundError
from roster.models.user import User
from roster.repositories.user_repository import UserRepository
from roster.schemas.user import ErrorResponse, UserCreate, UserResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["Users"])


def get_user_repository(db: AsyncSession = Depends(get_db_session)) -> UserRepository:
    """Binds a UserRepository to the per-request session."""
    return UserRepository(db)


@router.get(
    "",
    response_model=List[UserResponse],
    summary="List all users",
)
async def list_users(
    repository: UserRepository = Depends(get_user_repository),
) -> List[User]:
    logger.info("Getting all users from database")
    return await repository.find_all()


@router.post(
    "",
    response_model=UserResponse,
    responses={
        400: {"description": "Email already registered", "model": ErrorResponse},
    },
    summary="Create a user",
)
async def create_user(
    payload: UserCreate,
    repository: UserRepository = Depends(get_user_repository),
) -> User:
    """
    Create a user after checking the email is free.

    The lookup is not atomic with the insert. Two concurrent requests with the
    same email can both pass it; the UNIQUE constraint then rejects the second
    insert, and that rejection is answered with the same 400 as the lookup.
    The commit runs here, not in get_db_session(), so the 200 is only sent
    for a row that is durably stored.
    """
    logger.info("Creating new user: %s", payload.name)

    if await repository.find_by_email(payload.email) is not None:
        logger.warning("Email already exists: %s", payload.email)
        raise DuplicateEmailError(payload.email)

    try:
        user = await repository.save(User(name=payload.name, email=payload.email))
    except IntegrityError:
        await repository.rollback()
        if await repository.find_by_email(payload.email) is None:
            raise
        logger.warning("Email already exists (rejected by constraint): %s", payload.email)
        raise DuplicateEmailError(payload.email)

    await repository.commit()
    logger.info("User created successfully with ID: %d", user.id)
    return user


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    responses={
        404: {"description": "User not found", "model": ErrorResponse},
    },
    summary="Get a user by ID",
)
async def get_user(
    user_id: int,
    repository: UserRepository = Depends(get_user_repository),
) -> User:
    logger.info("Looking for user with ID: %d", user_id)

    user = await repository.find_by_id(user_id)
    if user is None:
        raise NotFoundError(resource="user", resource_id=str(user_id))

    logger.info("Found user: %s", user.name)
    return user


@router.delete(
    "/{user_id}",
    response_class=Response,
    responses={
        200: {"description": "User deleted; empty body"},
        404: {"description": "User not found", "model": ErrorResponse},
    },
    summary="Delete a user by ID",
)
async def delete_user(
    user_id: int,
    repository: UserRepository = Depends(get_user_repository),
) -> Response:
    logger.info("Attempting to delete user with ID: %d", user_id)

    user = await repository.find_by_id(user_id)
    if user is None:
        raise NotFoundError(resource="user", resource_id=str(user_id))

    await repository.delete(user)
    await repository.commit()
    logger.info("User deleted successfully: %s", user.name)
    return Response(status_code=200)
