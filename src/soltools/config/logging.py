"""Logging configuration using structlog.

The Helius API key travels in the query string, so request URLs must never
reach the log output unredacted. httpx logs every request URL at INFO;
it is held at WARNING and structlog events are scrubbed before rendering.
"""

import logging
import re
import sys
from typing import Any

import structlog

from soltools.config.settings import get_settings

API_KEY_PATTERN = re.compile(r"(api-key=)[^&\s\"']+")

# Libraries whose INFO output includes full request URLs
NOISY_LOGGERS = ("httpx", "httpcore")


def redact_api_key(
    _logger: Any, _method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Replace api-key query values in every string field of the event."""
    for key, value in event_dict.items():
        if isinstance(value, str) and "api-key=" in value:
            event_dict[key] = API_KEY_PATTERN.sub(r"\1***", value)
    return event_dict


def configure_logging() -> None:
    """Configure structlog for the application."""
    settings = get_settings()

    log_level = getattr(logging, settings.log_level)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            redact_api_key,
            structlog.dev.ConsoleRenderer()
            if settings.debug
            else structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # uvicorn and gradio use standard logging
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a configured logger instance."""
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger
