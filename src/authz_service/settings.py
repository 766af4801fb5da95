"""
authz_service.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Hide secrets from repr/logging (e.g., JWT secret).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="AUTHZ_", case_sensitive=False)

    # Environment controls toggle behavior like auto-init DB tables.
    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "authz-service"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Auth
    jwt_alg: str = "HS256"
    jwt_issuer: str = "authz-service"
    jwt_audience: str = "authz-api"
    jwt_secret: str = Field(default="dev-secret-change-me", repr=False)

    # The single role allowed to administer roles.
    super_admin_role: str = "ROLE_SUPER_ADMIN"

    # Persistence
    database_url: str = "sqlite+aiosqlite:///./authz.db"

    # Users created on dev/test startup (JSON list when set via env).
    seed_usernames: list[str] = Field(default_factory=list)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# `create_app` also keeps the settings it was built with on `app.state.settings`;
# request dependencies prefer that instance over the cached one.
