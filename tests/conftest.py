"""
tests.conftest

Shared fixtures: an app bound to a throwaway SQLite database and an httpx client.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from pathlib import Path

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI

from authz_service.api.app import create_app
from authz_service.auth.jwt import JwtConfig, issue_token
from authz_service.settings import Settings

SEEDED_USERS = ["alice", "bob", "carol"]


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        env="test",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'authz.db'}",
        seed_usernames=SEEDED_USERS,
    )


@pytest_asyncio.fixture
async def app(settings: Settings) -> AsyncIterator[FastAPI]:
    app = create_app(settings=settings)
    # httpx ASGITransport does not drive the lifespan; run it explicitly.
    async with app.router.lifespan_context(app):
        yield app


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def auth_headers(settings: Settings) -> Callable[..., dict[str, str]]:
    def _headers(*roles: str, subject: str = "tester") -> dict[str, str]:
        token = issue_token(
            cfg=JwtConfig.from_settings(settings), subject=subject, roles=list(roles)
        )
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def admin_headers(
    settings: Settings, auth_headers: Callable[..., dict[str, str]]
) -> dict[str, str]:
    return auth_headers(settings.super_admin_role, subject="root")
