"""
tests.test_auth

JWT helpers, the role guard, and the dev token endpoint.
"""

from __future__ import annotations

from datetime import timedelta

import httpx
import pytest

from authz_service.auth.deps import is_role_allowed
from authz_service.auth.jwt import (
    JwtConfig,
    JwtValidationError,
    decode_and_validate,
    issue_token,
)
from authz_service.settings import Settings

CFG = JwtConfig(alg="HS256", issuer="iss", audience="aud", secret="s3cret")


def test_is_role_allowed() -> None:
    assert is_role_allowed({"ROLE_SUPER_ADMIN", "ROLE_USER"}, "ROLE_SUPER_ADMIN")
    assert not is_role_allowed(["ROLE_USER"], "ROLE_SUPER_ADMIN")
    assert not is_role_allowed([], "ROLE_SUPER_ADMIN")


def test_token_roundtrip_keeps_subject_and_roles() -> None:
    token = issue_token(cfg=CFG, subject="root", roles=["ROLE_SUPER_ADMIN"])
    payload = decode_and_validate(cfg=CFG, token=token)
    assert payload["sub"] == "root"
    assert payload["roles"] == ["ROLE_SUPER_ADMIN"]


def test_expired_token_is_rejected() -> None:
    token = issue_token(cfg=CFG, subject="root", roles=[], ttl=timedelta(seconds=-10))
    with pytest.raises(JwtValidationError):
        decode_and_validate(cfg=CFG, token=token)


def test_wrong_audience_is_rejected() -> None:
    token = issue_token(cfg=CFG, subject="root", roles=[])
    other = JwtConfig(alg="HS256", issuer="iss", audience="elsewhere", secret="s3cret")
    with pytest.raises(JwtValidationError):
        decode_and_validate(cfg=other, token=token)


@pytest.mark.asyncio
async def test_dev_token_grants_role_access(
    client: httpx.AsyncClient, settings: Settings
) -> None:
    r = await client.post(
        "/v1/dev/token", json={"subject": "root", "roles": [settings.super_admin_role]}
    )
    assert r.status_code == 200
    token = r.json()["access_token"]

    r = await client.get("/role", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 200
    assert r.json() == []
