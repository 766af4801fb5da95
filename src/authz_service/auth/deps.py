"""
authz_service.auth.deps

FastAPI dependency functions for authentication and authorization.

Responsibilities:
- Convert a bearer token into a typed `Principal`.
- Gate role administration behind the configured super-admin role.
"""

from __future__ import annotations

from collections.abc import Iterable

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from starlette.status import HTTP_401_UNAUTHORIZED, HTTP_403_FORBIDDEN

from authz_service.auth.jwt import JwtConfig, JwtValidationError, decode_and_validate
from authz_service.auth.models import Principal
from authz_service.observability.logging import get_logger
from authz_service.settings import Settings, get_settings

log = get_logger(__name__)

_bearer = HTTPBearer(auto_error=False)


def request_settings(request: Request) -> Settings:
    # Prefer the settings the app was built with; fall back to env-driven ones.
    settings = getattr(request.app.state, "settings", None)
    return settings if settings is not None else get_settings()


def is_role_allowed(caller_roles: Iterable[str], required_role: str) -> bool:
    return required_role in frozenset(caller_roles)


def get_principal(
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
    settings: Settings = Depends(request_settings),
) -> Principal:
    if creds is None or not creds.credentials:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Missing bearer token")

    try:
        payload = decode_and_validate(cfg=JwtConfig.from_settings(settings), token=creds.credentials)
    except JwtValidationError as e:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail=f"Invalid token: {e}") from e

    subject = str(payload.get("sub", ""))
    roles_raw = payload.get("roles", [])
    if not subject:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Invalid token subject")
    if not isinstance(roles_raw, list):
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Invalid token roles")

    roles: frozenset[str] = frozenset(str(r) for r in roles_raw)
    return Principal(subject=subject, roles=roles)


def require_super_admin(
    principal: Principal = Depends(get_principal),
    settings: Settings = Depends(request_settings),
) -> Principal:
    if not is_role_allowed(principal.roles, settings.super_admin_role):
        log.debug("access_denied", subject=principal.subject, required=settings.super_admin_role)
        raise HTTPException(status_code=HTTP_403_FORBIDDEN, detail="Insufficient role")
    return principal


# --- Module Notes -----------------------------------------------------------
# `require_super_admin` is attached at router level in `api/routers/roles.py`, so
# it runs before request bodies reach the role service.
