"""
tests.test_role_service

`RoleService` rules exercised against in-memory collaborators.
"""

from __future__ import annotations

from collections.abc import Sequence

import pytest

from authz_service.services.errors import RejectReason, RoleRequestRejected
from authz_service.services.records import (
    RoleRecord,
    StoreFailure,
    StoreResult,
    UserIdentity,
)
from authz_service.services.role_service import RoleService, canonical_usernames


class FakeUserLookup:
    def __init__(self, *usernames: str) -> None:
        self._users = {name: UserIdentity(id=i, username=name) for i, name in enumerate(usernames, 1)}
        self.calls: list[list[str]] = []

    async def resolve(self, usernames: Sequence[str]) -> list[UserIdentity]:
        self.calls.append(list(usernames))
        return [self._users[u] for u in usernames if u in self._users]


class FakeRoleStore:
    def __init__(self) -> None:
        self.roles: dict[int, RoleRecord] = {}
        self.writes = 0
        self.deleted: list[int] = []
        self.reject_writes = False
        self._next_id = 1

    async def find_all(self) -> list[RoleRecord]:
        return list(self.roles.values())

    async def find_by_id(self, role_id: int) -> RoleRecord | None:
        return self.roles.get(role_id)

    async def find_by_name(self, name: str) -> RoleRecord | None:
        return next((r for r in self.roles.values() if r.name == name), None)

    async def try_create(self, role: RoleRecord) -> StoreResult:
        if self.reject_writes:
            return StoreResult.failed(StoreFailure.constraint_violation)
        if await self.find_by_name(role.name) is not None:
            return StoreResult.failed(StoreFailure.name_taken)
        stored = RoleRecord(id=self._next_id, name=role.name, members=role.members)
        self._next_id += 1
        self.roles[stored.id] = stored
        self.writes += 1
        return StoreResult.stored(stored)

    async def update(self, role: RoleRecord) -> StoreResult:
        if self.reject_writes:
            return StoreResult.failed(StoreFailure.constraint_violation)
        if role.id not in self.roles:
            return StoreResult.failed(StoreFailure.not_found)
        self.roles[role.id] = role
        self.writes += 1
        return StoreResult.stored(role)

    async def delete_by_id(self, role_id: int) -> None:
        self.deleted.append(role_id)
        self.roles.pop(role_id, None)


@pytest.fixture
def store() -> FakeRoleStore:
    return FakeRoleStore()


@pytest.fixture
def service(store: FakeRoleStore) -> RoleService:
    return RoleService(users=FakeUserLookup("alice", "bob"), roles=store)


def test_canonical_usernames_keeps_first_occurrence() -> None:
    assert canonical_usernames(["bob", "alice", "bob"]) == ["bob", "alice"]


@pytest.mark.asyncio
async def test_create_returns_persisted_role(service: RoleService) -> None:
    role = await service.create_role(name="ADMIN", usernames=["alice"])
    assert role.id > 0
    assert role.usernames == ["alice"]


@pytest.mark.asyncio
async def test_create_unknown_member_skips_store(
    service: RoleService, store: FakeRoleStore
) -> None:
    with pytest.raises(RoleRequestRejected) as exc:
        await service.create_role(name="ADMIN", usernames=["alice", "mallory"])
    assert exc.value.reason is RejectReason.unknown_member
    assert store.writes == 0


@pytest.mark.asyncio
async def test_create_resolves_deduplicated_names(store: FakeRoleStore) -> None:
    users = FakeUserLookup("alice")
    service = RoleService(users=users, roles=store)

    role = await service.create_role(name="ADMIN", usernames=["alice", "alice"])
    assert users.calls == [["alice"]]
    assert role.usernames == ["alice"]


@pytest.mark.asyncio
async def test_create_taken_name_is_store_rejection(service: RoleService) -> None:
    await service.create_role(name="ADMIN", usernames=[])
    with pytest.raises(RoleRequestRejected) as exc:
        await service.create_role(name="ADMIN", usernames=["bob"])
    assert exc.value.reason is RejectReason.store_rejected


@pytest.mark.asyncio
async def test_update_missing_role(service: RoleService) -> None:
    with pytest.raises(RoleRequestRejected) as exc:
        await service.update_role(role_id=7, name="X", usernames=[])
    assert exc.value.reason is RejectReason.role_not_found


@pytest.mark.asyncio
async def test_update_name_collision(service: RoleService, store: FakeRoleStore) -> None:
    await service.create_role(name="ADMIN", usernames=[])
    ops = await service.create_role(name="OPS", usernames=[])

    with pytest.raises(RoleRequestRejected) as exc:
        await service.update_role(role_id=ops.id, name="ADMIN", usernames=[])
    assert exc.value.reason is RejectReason.name_taken
    assert store.roles[ops.id].name == "OPS"


@pytest.mark.asyncio
async def test_update_keeping_own_name(service: RoleService) -> None:
    admin = await service.create_role(name="ADMIN", usernames=["alice"])

    updated = await service.update_role(
        role_id=admin.id, name="ADMIN", usernames=["alice", "bob"]
    )
    assert updated == RoleRecord(
        id=admin.id,
        name="ADMIN",
        members=frozenset({UserIdentity(1, "alice"), UserIdentity(2, "bob")}),
    )


@pytest.mark.asyncio
async def test_update_unknown_member_leaves_role(
    service: RoleService, store: FakeRoleStore
) -> None:
    admin = await service.create_role(name="ADMIN", usernames=["alice"])

    with pytest.raises(RoleRequestRejected) as exc:
        await service.update_role(role_id=admin.id, name="ADMIN", usernames=["mallory"])
    assert exc.value.reason is RejectReason.unknown_member
    assert store.roles[admin.id] == admin


@pytest.mark.asyncio
async def test_update_store_failure(service: RoleService, store: FakeRoleStore) -> None:
    admin = await service.create_role(name="ADMIN", usernames=[])
    store.reject_writes = True

    with pytest.raises(RoleRequestRejected) as exc:
        await service.update_role(role_id=admin.id, name="ADMIN", usernames=["bob"])
    assert exc.value.reason is RejectReason.store_rejected


@pytest.mark.asyncio
async def test_delete_is_delegated_without_lookup(
    service: RoleService, store: FakeRoleStore
) -> None:
    await service.delete_role(99)
    assert store.deleted == [99]


@pytest.mark.asyncio
async def test_list_roles(service: RoleService) -> None:
    await service.create_role(name="ADMIN", usernames=["alice"])
    await service.create_role(name="OPS", usernames=["bob"])

    names = sorted(r.name for r in await service.list_roles())
    assert names == ["ADMIN", "OPS"]
