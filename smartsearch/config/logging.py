"""
structlog setup for the search service.

Console rendering in development, one JSON object per line elsewhere with
Arabic and accented text left readable. Query text is user supplied and
can be long, so it is clipped before rendering.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor

from smartsearch.config.settings import get_settings

MAX_LOGGED_QUERY_LENGTH = 120
QUERY_FIELDS = ("query", "original_query")

# Third-party loggers kept at WARNING
QUIET_LOGGERS = ("httpx", "httpcore", "uvicorn.access", "aiosqlite", "redis")


def add_service_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Stamp service name, version and environment on each event."""
    settings = get_settings()
    event_dict.setdefault("service", settings.app_name)
    event_dict.setdefault("version", settings.app_version)
    event_dict.setdefault("environment", settings.environment)
    return event_dict


def clip_query_text(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    for field in QUERY_FIELDS:
        value = event_dict.get(field)
        if isinstance(value, str) and len(value) > MAX_LOGGED_QUERY_LENGTH:
            event_dict[field] = value[:MAX_LOGGED_QUERY_LENGTH] + "..."
    return event_dict


def build_processors(json_output: bool) -> list[Processor]:
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        add_service_context,
        clip_query_text,
    ]
    if json_output:
        processors += [
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))
    return processors


def configure_logging(level: str | None = None) -> None:
    """Configure structlog and the stdlib root logger; safe to call again."""
    settings = get_settings()
    log_level = getattr(logging, level or settings.log_level)

    structlog.configure(
        processors=build_processors(json_output=settings.environment != "development"),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=log_level, force=True)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)
