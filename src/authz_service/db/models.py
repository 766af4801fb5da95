"""
authz_service.db.models

Persistence schema for role administration.

Responsibilities:
- Define ORM models:
  - User: identity referenced by username
  - Role: named grouping of users, unique by name
  - role_members: association table between the two
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Column, ForeignKey, Integer, String, Table
from sqlalchemy.orm import Mapped, mapped_column, relationship

from authz_service.db.base import Base


def _utcnow() -> datetime:
    # Persist naive UTC timestamps for simplicity.
    return datetime.utcnow()


role_members = Table(
    "role_members",
    Base.metadata,
    Column("role_id", ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
)


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(256), nullable=False, unique=True, index=True)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)


class Role(Base):
    __tablename__ = "roles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # Uniqueness is enforced here; service-level checks are only a fast path.
    name: Mapped[str] = mapped_column(String(128), nullable=False, unique=True, index=True)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow, onupdate=_utcnow)

    # Eager "selectin" loading: async sessions cannot lazy-load on attribute access.
    users: Mapped[set[User]] = relationship(
        secondary=role_members,
        collection_class=set,
        lazy="selectin",
    )
