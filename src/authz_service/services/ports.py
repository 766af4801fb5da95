"""
authz_service.services.ports

Collaborator interfaces consumed by `RoleService`.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from authz_service.services.records import RoleRecord, StoreResult, UserIdentity


class UserLookup(Protocol):
    async def resolve(self, usernames: Sequence[str]) -> list[UserIdentity]:
        """Return the users that exist among `usernames`; unknown names are skipped."""
        ...


class RoleStore(Protocol):
    async def find_all(self) -> list[RoleRecord]: ...

    async def find_by_id(self, role_id: int) -> RoleRecord | None: ...

    async def find_by_name(self, name: str) -> RoleRecord | None: ...

    async def try_create(self, role: RoleRecord) -> StoreResult:
        """Persist a new role unless its name is taken or a constraint fails."""
        ...

    async def update(self, role: RoleRecord) -> StoreResult:
        """Replace name and members of the role with `role.id`."""
        ...

    async def delete_by_id(self, role_id: int) -> None: ...
