"""
Roster Backend — User SQLAlchemy Model
=======================================

What:  ORM model representing the `users` table.
Who:   Used by UserRepository for CRUD and by create_tables() for DDL.

Table Design:
    - id: surrogate key assigned by the database on insert (BIGINT identity on
      PostgreSQL, INTEGER PRIMARY KEY on SQLite so rowid autoincrement applies)
    - name: required, NOT NULL
    - email: required, UNIQUE; the only invariant the service enforces.
      The constraint is what keeps concurrent duplicate inserts out; the
      handler's lookup-before-insert only produces the nicer error.
"""

from sqlalchemy import BigInteger, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from roster.database import Base


class User(Base):
    """
    A registered user.

    Lifecycle:
        1. Created by POST /api/users (id assigned on flush)
        2. Never updated (there is no update operation)
        3. Removed by DELETE /api/users/{id}
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    __table_args__ = (
        UniqueConstraint("email", name="uq_users_email"),
    )

    def __repr__(self) -> str:
        """Developer-friendly string representation for debugging."""
        return f"User(id={self.id}, name='{self.name}', email='{self.email}')"
