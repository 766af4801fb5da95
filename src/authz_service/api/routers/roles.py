"""
authz_service.api.routers.roles

Role administration endpoints (super-admin only).

Responsibilities:
- List, create, update and delete roles under `/role`.
- Map role service rejections to 400 responses.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from pydantic import BaseModel, Field
from starlette.status import (
    HTTP_201_CREATED,
    HTTP_204_NO_CONTENT,
    HTTP_400_BAD_REQUEST,
)

from authz_service.api.deps import role_service
from authz_service.auth.deps import require_super_admin
from authz_service.services.errors import RoleRequestRejected
from authz_service.services.records import UNASSIGNED_ID, RoleRecord
from authz_service.services.role_service import RoleService

router = APIRouter(
    prefix="/role",
    tags=["roles"],
    dependencies=[Depends(require_super_admin)],
)


class RoleDto(BaseModel):
    id: int = UNASSIGNED_ID
    name: str = Field(min_length=1, max_length=128)
    users: list[str] = Field(default_factory=list)

    @classmethod
    def from_record(cls, role: RoleRecord) -> RoleDto:
        return cls(id=role.id, name=role.name, users=role.usernames)


# Rejection causes are not exposed to callers; the role service logs them at debug level.
REJECTED_DETAIL = "Role request rejected"


def _bad_request() -> HTTPException:
    return HTTPException(status_code=HTTP_400_BAD_REQUEST, detail=REJECTED_DETAIL)


@router.get("", response_model=list[RoleDto])
async def list_roles(service: RoleService = Depends(role_service)) -> list[RoleDto]:
    return [RoleDto.from_record(r) for r in await service.list_roles()]


@router.post("", response_model=RoleDto, status_code=HTTP_201_CREATED)
async def create_role(
    body: RoleDto,
    service: RoleService = Depends(role_service),
) -> RoleDto:
    # A client-supplied id is ignored on create.
    try:
        role = await service.create_role(name=body.name, usernames=body.users)
    except RoleRequestRejected as e:
        raise _bad_request() from e
    return RoleDto.from_record(role)


@router.put("", response_model=RoleDto)
async def update_role(
    body: RoleDto,
    service: RoleService = Depends(role_service),
) -> RoleDto:
    try:
        role = await service.update_role(role_id=body.id, name=body.name, usernames=body.users)
    except RoleRequestRejected as e:
        raise _bad_request() from e
    return RoleDto.from_record(role)


@router.delete("", status_code=HTTP_204_NO_CONTENT)
async def delete_role(
    role_id: int = Query(alias="id"),
    service: RoleService = Depends(role_service),
) -> Response:
    await service.delete_role(role_id)
    return Response(status_code=HTTP_204_NO_CONTENT)


# --- Module Notes -----------------------------------------------------------
# Deleting an id that does not exist also answers 204; callers cannot tell the
# two cases apart.
