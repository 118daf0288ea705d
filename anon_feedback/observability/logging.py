"""
Structured logging configuration using structlog.

JSON logs in production, coloured console output elsewhere. Request
handlers bind a ``request_id`` that every line logged while serving the
request carries. Session material (tokens, cookies, the auth secret) is
masked before rendering.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor

from anon_feedback.config.settings import get_settings

REDACTED = "[redacted]"
SENSITIVE_KEYS = frozenset({"token", "cookie", "cookies", "authorization", "secret"})

# Loggers that are chatty at INFO. uvicorn.access repeats the request
# middleware's "HTTP request" line.
QUIET_LOGGERS = ("uvicorn.access", "httpx", "httpcore", "asyncio")


def redact_session_secrets(
    logger: Any, method_name: str, event_dict: EventDict
) -> EventDict:
    """Mask values bound under session-bearing keys."""
    for key in SENSITIVE_KEYS.intersection(event_dict):
        event_dict[key] = REDACTED
    return event_dict


def resolve_log_level(debug: bool | None = None) -> int:
    """Numeric level for the run; ``debug`` overrides ``DEBUG``/``LOG_LEVEL``."""
    settings = get_settings()
    if debug is None:
        debug = settings.debug
    return logging.DEBUG if debug else getattr(logging, settings.log_level)


def setup_logging(debug: bool | None = None) -> None:
    """
    Configure structured logging for the application.

    Args:
        debug: Force debug output on or off. ``None`` follows the
            ``DEBUG`` setting.

    Usage:
        setup_logging(debug=True)
        logger = structlog.get_logger()
        logger.info("Feedback list loaded", count=3)
    """
    settings = get_settings()
    level = resolve_log_level(debug)

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        redact_session_secrets,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.is_production:
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=True),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )
    # basicConfig is a no-op once handlers exist; the level still applies.
    logging.getLogger().setLevel(level)

    quiet_level = logging.DEBUG if level == logging.DEBUG else logging.WARNING
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(quiet_level)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger (defaults to the caller's module name)."""
    return structlog.get_logger(name)


def bind_context(**kwargs) -> None:
    """
    Bind context variables to all subsequent log messages.

    Args:
        **kwargs: Key-value pairs to bind
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Clear all bound context variables."""
    structlog.contextvars.clear_contextvars()
