"""Structured logging configuration for the version redirect service.

Logs are emitted through structlog with dotted event names and key/value
context, so that resolution outcomes can be filtered by package name,
version source or failure reason in a log aggregation system.

Examples:
    Configure logging::

        from version_redirect.observability.logging import configure_logging

        configure_logging(level="INFO", json_output=True)

    Use the logger::

        from version_redirect.observability.logging import get_logger

        logger = get_logger(__name__)
        logger.info("resolve.cache_hit", package="asar", version="4.0.1")

    Output (JSON)::

        {
            "package": "asar",
            "version": "4.0.1",
            "event": "resolve.cache_hit",
            "level": "info",
            "timestamp": "2024-01-01T00:00:00.000000Z"
        }
"""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import structlog

from version_redirect.config import RedirectConfig


def _processors(json_output: bool) -> list[Any]:
    renderer: Any = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=True)
    )
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        renderer,
    ]


def configure_logging(level: str = "INFO", json_output: bool = True) -> None:
    """Configure structured logging for the service.

    Call once at startup, before the first log call, since loggers are
    cached on first use. Standard library loggers (uvicorn, httpx) are
    sent to stdout at the same level.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: If True, emit JSON logs; if False, use console format
    """
    log_level = logging.getLevelName(level.upper())

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=log_level)

    structlog.configure(
        processors=_processors(json_output),
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging_from_config(config: RedirectConfig) -> None:
    """Configure logging from the service configuration."""
    configure_logging(level=config.log_level, json_output=config.json_logs)


@contextmanager
def request_context(**values: Any) -> Iterator[None]:
    """Attach values to every log event emitted while handling a request.

    Example:
        >>> with request_context(method="GET", path="/asar"):
        ...     logger.info("resolve.cache_hit", package="asar")
    """
    with structlog.contextvars.bound_contextvars(**values):
        yield


def get_logger(name: str) -> Any:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__ from the calling module)
    """
    return structlog.get_logger(name)
