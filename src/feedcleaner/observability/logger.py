"""Structured logging for observability."""

from __future__ import annotations

import logging

import structlog
from structlog.types import Processor

from ..config.settings import get_settings


def configure_logging() -> None:
    """Configure structlog.

    ``LOG_FORMAT=json`` (default) emits one JSON object per line with CJK text
    left unescaped; ``LOG_FORMAT=console`` uses structlog's dev renderer.
    Every event carries the service name.
    """
    settings = get_settings()
    log_level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(log_level, int):
        log_level = logging.INFO

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    if settings.log_format == "console":
        processors.append(structlog.dev.ConsoleRenderer())
    else:
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer(ensure_ascii=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
    structlog.contextvars.bind_contextvars(service=settings.service_name)


def get_logger(name: str | None = None):
    return structlog.get_logger(name)
