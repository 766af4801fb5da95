"""
authz_service.api.__main__

Entrypoint for running the FastAPI application via `python -m authz_service.api`.
"""

from __future__ import annotations

import uvicorn

from authz_service.api.app import create_app
from authz_service.settings import get_settings


def main() -> None:
    settings = get_settings()
    app = create_app(settings=settings)

    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,  # structlog
    )


if __name__ == "__main__":
    main()
