"""
Roster Backend — User Repository (Persistence Access)
======================================================

What:  All reads and writes of the `users` table.
Why:   Keeps SQL out of the route handlers; handlers only see User objects
       or None.
How:   Wraps one AsyncSession. Writes are flushed immediately so generated ids
       and constraint violations surface inside the handler. Handlers that write
       call commit() before building their response, so a failed commit is
       reported to the client instead of being lost after a 200.

No retries and no error translation: SQLAlchemy exceptions propagate to the
caller unchanged.
"""

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from roster.models.user import User

logger = logging.getLogger(__name__)

# users.id is BIGINT; larger ids cannot exist and some drivers refuse to bind them
MAX_USER_ID = 2**63 - 1


class UserRepository:
    """
    CRUD access to User records for a single session.

    Query plans:
        find_by_id:    SELECT ... WHERE id = :id        → primary key
        find_by_email: SELECT ... WHERE email = :email  → uq_users_email index
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def save(self, user: User) -> User:
        """
        Insert a new user, or flush pending changes of an already-persistent one.

        Raises:
            sqlalchemy.exc.IntegrityError: the email is already taken
                (or another column constraint failed)
        """
        self.session.add(user)
        await self.session.flush()  # Assigns the id without committing
        logger.debug("Flushed %r", user)
        return user

    async def find_all(self) -> List[User]:
        # Ordered by id only to keep responses stable between calls
        result = await self.session.execute(select(User).order_by(User.id))
        return list(result.scalars().all())

    async def find_by_id(self, user_id: int) -> Optional[User]:
        if not -MAX_USER_ID - 1 <= user_id <= MAX_USER_ID:
            return None
        return await self.session.get(User, user_id)

    async def find_by_email(self, email: str) -> Optional[User]:
        result = await self.session.execute(
            select(User).where(User.email == email)
        )
        return result.scalar_one_or_none()

    async def delete(self, user: User) -> None:
        await self.session.delete(user)
        await self.session.flush()

    async def commit(self) -> None:
        await self.session.commit()

    async def rollback(self) -> None:
        """Discard the failed transaction so the session can be queried again."""
        await self.session.rollback()
