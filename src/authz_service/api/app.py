"""
authz_service.api.app

FastAPI app factory for the role administration service.

Responsibilities:
- Build the FastAPI application and register routers/middleware.
- Initialize and dispose shared infrastructure (DB engine/session factory).
- Provide a single composition root where cross-cutting concerns live.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from authz_service import __version__
from authz_service.api.routers.dev_auth import router as dev_auth_router
from authz_service.api.routers.health import router as health_router
from authz_service.api.routers.roles import router as roles_router
from authz_service.db.init_db import init_db, seed_users
from authz_service.db.session import create_engine, create_sessionmaker
from authz_service.observability.logging import configure_logging, get_logger
from authz_service.observability.middleware import RequestContextMiddleware
from authz_service.settings import Settings

log = get_logger(__name__)


def create_app(*, settings: Settings) -> FastAPI:
    configure_logging(
        service_name=settings.service_name, env=settings.env, level=settings.log_level
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        # One engine and session factory per process; routers get sessions via `api.deps`.
        engine = create_engine(settings)
        app.state.engine = engine
        app.state.sessionmaker = create_sessionmaker(engine)
        if settings.env in ("dev", "test"):
            # Prod schema is managed by Alembic migrations.
            await init_db(engine)
            await seed_users(app.state.sessionmaker, settings.seed_usernames)
        try:
            yield
        finally:
            await engine.dispose()
            log.info("shutdown")

    app = FastAPI(
        title="Role Administration Service",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(RequestContextMiddleware)
    app.include_router(health_router, tags=["health"])
    app.include_router(dev_auth_router)
    app.include_router(roles_router)

    return app
