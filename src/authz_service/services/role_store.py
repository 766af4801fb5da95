"""
authz_service.services.role_store

Database-backed `RoleStore` (transaction owner for role writes).

Responsibilities:
- Map ORM roles to immutable `RoleRecord`s.
- Commit each successful write; roll back and report integrity failures.
"""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from authz_service.db.models import Role, User
from authz_service.db.repositories.roles import RoleRepo
from authz_service.db.repositories.users import UserRepo
from authz_service.observability.logging import get_logger
from authz_service.services.records import (
    RoleRecord,
    StoreFailure,
    StoreResult,
    UserIdentity,
)

log = get_logger(__name__)


def _to_record(role: Role) -> RoleRecord:
    return RoleRecord(
        id=role.id,
        name=role.name,
        members=frozenset(UserIdentity(id=u.id, username=u.username) for u in role.users),
    )


class SqlRoleStore:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._roles = RoleRepo(session)
        self._users = UserRepo(session)

    async def find_all(self) -> list[RoleRecord]:
        return [_to_record(r) for r in await self._roles.list_all()]

    async def find_by_id(self, role_id: int) -> RoleRecord | None:
        role = await self._roles.get(role_id)
        return _to_record(role) if role is not None else None

    async def find_by_name(self, name: str) -> RoleRecord | None:
        role = await self._roles.get_by_name(name)
        return _to_record(role) if role is not None else None

    async def try_create(self, role: RoleRecord) -> StoreResult:
        if await self._roles.get_by_name(role.name) is not None:
            return StoreResult.failed(StoreFailure.name_taken)

        users = await self._member_rows(role)
        if users is None:
            return StoreResult.failed(StoreFailure.constraint_violation)

        try:
            created = await self._roles.create(name=role.name, users=users)
            await self._session.commit()
        except IntegrityError as e:
            await self._session.rollback()
            log.debug("role_create_integrity_error", name=role.name, error=str(e.orig))
            return StoreResult.failed(StoreFailure.constraint_violation)

        log.info("role_created", role_id=created.id, name=created.name)
        return StoreResult.stored(_to_record(created))

    async def update(self, role: RoleRecord) -> StoreResult:
        existing = await self._roles.get(role.id)
        if existing is None:
            return StoreResult.failed(StoreFailure.not_found)

        holder = await self._roles.get_by_name(role.name)
        if holder is not None and holder.id != role.id:
            return StoreResult.failed(StoreFailure.name_taken)

        users = await self._member_rows(role)
        if users is None:
            return StoreResult.failed(StoreFailure.constraint_violation)

        try:
            updated = await self._roles.replace(existing, name=role.name, users=users)
            await self._session.commit()
        except IntegrityError as e:
            await self._session.rollback()
            log.debug("role_update_integrity_error", role_id=role.id, error=str(e.orig))
            return StoreResult.failed(StoreFailure.constraint_violation)

        log.info("role_updated", role_id=updated.id, name=updated.name)
        return StoreResult.stored(_to_record(updated))

    async def delete_by_id(self, role_id: int) -> None:
        role = await self._roles.get(role_id)
        if role is None:
            return
        await self._roles.delete(role)
        await self._session.commit()
        log.info("role_deleted", role_id=role_id)

    async def _member_rows(self, role: RoleRecord) -> list[User] | None:
        # Members may have been removed since they were resolved.
        ids = sorted(m.id for m in role.members)
        users = await self._users.find_all_by_id(ids)
        return users if len(users) == len(ids) else None
