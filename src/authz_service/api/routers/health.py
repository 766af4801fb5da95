"""
authz_service.api.routers.health

Health and readiness endpoints.

Responsibilities:
- Provide liveness probe (`/healthz`).
- Provide readiness probe (`/readyz`): the role and user tables must be queryable.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from authz_service.api.deps import db_session
from authz_service.db.models import Role, User

router = APIRouter()


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz")
async def readyz(session: AsyncSession = Depends(db_session)) -> dict[str, str | int]:
    # Fails (500) when the schema is missing, e.g. prod started before migrations ran.
    roles = (await session.execute(select(func.count()).select_from(Role))).scalar_one()
    users = (await session.execute(select(func.count()).select_from(User))).scalar_one()
    return {"status": "ready", "roles": roles, "users": users}
