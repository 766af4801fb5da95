"""
authz_service.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide dependency functions for settings, DB sessions and services.
- Encapsulate app.state access patterns (engine/sessionmaker).
"""

from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from authz_service.auth.deps import request_settings
from authz_service.services.role_service import RoleService
from authz_service.services.role_store import SqlRoleStore
from authz_service.services.user_lookup import SqlUserLookup
from authz_service.settings import Settings


def settings_dep(settings: Settings = Depends(request_settings)) -> Settings:
    return settings


def sessionmaker_from_app(request: Request) -> async_sessionmaker[AsyncSession]:
    # The sessionmaker is created on app startup in `authz_service.api.app.create_app`.
    return request.app.state.sessionmaker  # type: ignore[attr-defined]


async def db_session(
    session_factory: async_sessionmaker[AsyncSession] = Depends(sessionmaker_from_app),
) -> AsyncIterator[AsyncSession]:
    # Request-scoped DB session. Commit/rollback is managed by the role store.
    async with session_factory() as session:
        yield session


def role_service(session: AsyncSession = Depends(db_session)) -> RoleService:
    return RoleService(users=SqlUserLookup(session), roles=SqlRoleStore(session))
