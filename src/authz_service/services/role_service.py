"""
authz_service.services.role_service

Role administration service.

Responsibilities:
- Resolve member usernames and reject requests naming unknown users.
- Check existence and name collisions before updating.
- Delegate writes to the role store and translate its failures.

The existence and uniqueness checks made here are a fast path only; the role
store (and the unique constraint behind it) decides whether a write happens.
"""

from __future__ import annotations

from collections.abc import Iterable

from authz_service.observability.logging import get_logger
from authz_service.services.errors import RejectReason, RoleRequestRejected
from authz_service.services.ports import RoleStore, UserLookup
from authz_service.services.records import UNASSIGNED_ID, RoleRecord, UserIdentity

log = get_logger(__name__)


def canonical_usernames(usernames: Iterable[str]) -> list[str]:
    """Deduplicate member usernames, keeping first-seen order."""
    return list(dict.fromkeys(usernames))


class RoleService:
    def __init__(self, *, users: UserLookup, roles: RoleStore) -> None:
        self._users = users
        self._roles = roles

    async def list_roles(self) -> list[RoleRecord]:
        return await self._roles.find_all()

    async def create_role(self, *, name: str, usernames: Iterable[str]) -> RoleRecord:
        members = await self._resolve_members(usernames, action="create")

        result = await self._roles.try_create(
            RoleRecord(id=UNASSIGNED_ID, name=name, members=members)
        )
        if result.role is None:
            log.debug("role_create_rejected", name=name, failure=result.failure)
            raise RoleRequestRejected(RejectReason.store_rejected, "Role can not be created")
        return result.role

    async def update_role(
        self, *, role_id: int, name: str, usernames: Iterable[str]
    ) -> RoleRecord:
        current = await self._roles.find_by_id(role_id)
        if current is None:
            log.debug("role_update_rejected", role_id=role_id, reason=RejectReason.role_not_found)
            raise RoleRequestRejected(RejectReason.role_not_found, "Role to update does not exist")

        if current.name != name and await self._roles.find_by_name(name) is not None:
            log.debug("role_update_rejected", role_id=role_id, reason=RejectReason.name_taken)
            raise RoleRequestRejected(
                RejectReason.name_taken, "Role with the same name already exists"
            )

        members = await self._resolve_members(usernames, action="update")

        result = await self._roles.update(RoleRecord(id=role_id, name=name, members=members))
        if result.role is None:
            log.debug("role_update_rejected", role_id=role_id, failure=result.failure)
            raise RoleRequestRejected(RejectReason.store_rejected, "Role can not be updated")
        return result.role

    async def delete_role(self, role_id: int) -> None:
        # Unknown ids are not reported; deletion is a silent no-op for them.
        await self._roles.delete_by_id(role_id)

    async def _resolve_members(
        self, usernames: Iterable[str], *, action: str
    ) -> frozenset[UserIdentity]:
        requested = canonical_usernames(usernames)
        resolved = await self._users.resolve(requested)
        if len(resolved) != len(requested):
            found = {u.username for u in resolved}
            log.debug(
                f"role_{action}_rejected",
                reason=RejectReason.unknown_member,
                unknown=[u for u in requested if u not in found],
            )
            raise RoleRequestRejected(RejectReason.unknown_member, "Users do not exist")
        return frozenset(resolved)
