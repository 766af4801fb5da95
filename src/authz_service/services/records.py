"""
authz_service.services.records

Request-scoped value types passed between the role service and its collaborators.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

# Id carried by a role that has not been persisted yet.
UNASSIGNED_ID = 0


@dataclass(frozen=True, slots=True)
class UserIdentity:
    id: int
    username: str


@dataclass(frozen=True, slots=True)
class RoleRecord:
    id: int
    name: str
    members: frozenset[UserIdentity] = field(default_factory=frozenset)

    @property
    def usernames(self) -> list[str]:
        return sorted(m.username for m in self.members)


class StoreFailure(enum.StrEnum):
    name_taken = "NAME_TAKEN"
    not_found = "NOT_FOUND"
    constraint_violation = "CONSTRAINT_VIOLATION"


@dataclass(frozen=True, slots=True)
class StoreResult:
    """Outcome of a role store write: the persisted role, or why there is none."""

    role: RoleRecord | None = None
    failure: StoreFailure | None = None

    @property
    def ok(self) -> bool:
        return self.role is not None

    @classmethod
    def stored(cls, role: RoleRecord) -> StoreResult:
        return cls(role=role)

    @classmethod
    def failed(cls, failure: StoreFailure) -> StoreResult:
        return cls(failure=failure)
