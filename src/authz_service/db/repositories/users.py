"""
authz_service.db.repositories.users

Repository for `User` entities.
"""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from authz_service.db.models import User


class UserRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, *, username: str) -> User:
        user = User(username=username)
        self._session.add(user)
        await self._session.flush()
        return user

    async def find_all_by_username(self, usernames: Sequence[str]) -> list[User]:
        # Only existing users are returned; callers compare counts to spot unknown names.
        if not usernames:
            return []
        stmt = select(User).where(User.username.in_(list(usernames))).order_by(User.id)
        return list((await self._session.execute(stmt)).scalars().all())

    async def find_all_by_id(self, user_ids: Sequence[int]) -> list[User]:
        if not user_ids:
            return []
        stmt = select(User).where(User.id.in_(list(user_ids))).order_by(User.id)
        return list((await self._session.execute(stmt)).scalars().all())
