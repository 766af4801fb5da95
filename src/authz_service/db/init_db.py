"""
authz_service.db.init_db

DB initialization helpers (dev/test convenience).

Responsibilities:
- Create tables for local development and tests.
- Seed a configured list of users so roles have members to reference.
"""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from authz_service.db import models  # noqa: F401  # ensure models are registered on Base.metadata
from authz_service.db.base import Base
from authz_service.db.repositories.users import UserRepo
from authz_service.observability.logging import get_logger

log = get_logger(__name__)


async def init_db(engine: AsyncEngine) -> None:
    """
    Dev/test bootstrap: create tables if they don't exist.
    Production should rely on Alembic migrations.
    """

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def seed_users(
    session_factory: async_sessionmaker[AsyncSession], usernames: Iterable[str]
) -> int:
    """Create any of `usernames` that do not exist yet. Returns how many were added."""

    wanted = sorted(set(usernames))
    if not wanted:
        return 0

    async with session_factory() as session:
        users = UserRepo(session)
        existing = {u.username for u in await users.find_all_by_username(wanted)}
        created = 0
        for username in wanted:
            if username in existing:
                continue
            await users.create(username=username)
            created += 1
        await session.commit()

    log.info("users_seeded", created=created, requested=len(wanted))
    return created
