"""
authz_service.observability.logging

Structured logging configuration for the service.

Responsibilities:
- Configure `structlog` for JSON logs on top of stdlib logging.
- Tag every event with the service name and deployment environment.
- Keep database driver chatter out of DEBUG output, where role rejections are logged.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

# Loggers that flood DEBUG with one line per statement/connection event.
NOISY_LOGGERS = ("aiosqlite", "sqlalchemy.engine", "sqlalchemy.pool")


def configure_logging(*, service_name: str, env: str, level: str) -> None:
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
    )
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            _add_static_fields(service=service_name, env=env),
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def _add_static_fields(**fields: str):
    def processor(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        for key, value in fields.items():
            event_dict.setdefault(key, value)
        return event_dict

    return processor


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


# --- Module Notes -----------------------------------------------------------
# Rejections in the role service are logged at debug level; raise `log_level`
# to DEBUG to see why a request got a 400.
