"""
authz_service.db.repositories.roles

Repository for `Role` entities.

Responsibilities:
- Query roles (all, by id, by name) with their members loaded.
- Stage inserts, replacements and deletes; flushing is done here, committing is not.
"""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from authz_service.db.models import Role, User


class RoleRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_all(self) -> list[Role]:
        stmt = select(Role).order_by(Role.id)
        return list((await self._session.execute(stmt)).scalars().all())

    async def get(self, role_id: int) -> Role | None:
        return await self._session.get(Role, role_id)

    async def get_by_name(self, name: str) -> Role | None:
        stmt = select(Role).where(Role.name == name)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def create(self, *, name: str, users: Iterable[User]) -> Role:
        role = Role(name=name, users=set(users))
        self._session.add(role)
        await self._session.flush()
        return role

    async def replace(self, role: Role, *, name: str, users: Iterable[User]) -> Role:
        role.name = name
        role.users = set(users)
        await self._session.flush()
        return role

    async def delete(self, role: Role) -> None:
        await self._session.delete(role)
        await self._session.flush()
