"""
authz_service.services.user_lookup

Database-backed `UserLookup`.
"""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from authz_service.db.repositories.users import UserRepo
from authz_service.services.records import UserIdentity


class SqlUserLookup:
    def __init__(self, session: AsyncSession) -> None:
        self._users = UserRepo(session)

    async def resolve(self, usernames: Sequence[str]) -> list[UserIdentity]:
        users = await self._users.find_all_by_username(usernames)
        return [UserIdentity(id=u.id, username=u.username) for u in users]
