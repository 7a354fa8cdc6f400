"""Structured logging for softcrud — structlog rendered through stdlib logging.

Entity events (``entity.created``, ``entity.updated``, ``entity.soft_deleted``)
and the request-id middleware log through structlog; uvicorn, SQLAlchemy and
the database drivers log through stdlib and share the same formatter.
"""

from __future__ import annotations

import logging
import logging.config
import os

import structlog

DEFAULT_LEVEL = "INFO"
DEFAULT_FORMAT = "console"

RENDERERS: dict[str, type] = {
    "console": structlog.dev.ConsoleRenderer,
    "json": structlog.processors.JSONRenderer,
}

# Third-party loggers that drown out entity events at INFO.
QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "asyncpg", "aiosqlite")


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]


def setup_logging(level: str | None = None, fmt: str | None = None) -> None:
    """Configure structlog and stdlib logging.

    *level* and *fmt* take precedence; when omitted they fall back to
        SOFTCRUD_LOG_LEVEL  — softcrud log level (default: INFO)
        SOFTCRUD_LOG_FORMAT — console | json (default: console)

    An unrecognised format falls back to console output.
    """
    log_level = (level or os.environ.get("SOFTCRUD_LOG_LEVEL", DEFAULT_LEVEL)).upper()
    log_format = (fmt or os.environ.get("SOFTCRUD_LOG_FORMAT", DEFAULT_FORMAT)).lower()
    renderer = RENDERERS.get(log_format, RENDERERS[DEFAULT_FORMAT])()
    shared = _shared_processors()

    structlog.configure(
        processors=shared + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    loggers = {name: {"level": "WARNING"} for name in QUIET_LOGGERS}
    loggers["softcrud"] = {"level": log_level}

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "structlog": {
                    "()": structlog.stdlib.ProcessorFormatter,
                    "foreign_pre_chain": shared,
                    "processors": [
                        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                        renderer,
                    ],
                },
            },
            "handlers": {
                "default": {
                    "class": "logging.StreamHandler",
                    "stream": "ext://sys.stdout",
                    "formatter": "structlog",
                },
            },
            "root": {"handlers": ["default"], "level": log_level},
            "loggers": loggers,
        }
    )
