"""
Structured logging configuration for whiteboard-sync.

Configures structlog for human-readable console logging (default) or JSON logging,
with room and session context.
"""

import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import Processor

from whiteboard_sync.infrastructure.config import get_settings


def configure_logging(log_level: Optional[str] = None, log_format: Optional[str] = None) -> None:
    """
    Configure structlog.

    Omitted arguments fall back to ``WHITEBOARD_LOG_LEVEL`` and
    ``WHITEBOARD_LOG_FORMAT``.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_format: "text" for console output, "json" for structured logs
    """
    current = get_settings()
    log_level = log_level or current.log_level
    log_format = log_format or current.log_format

    # Configure standard logging to use structlog
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper(), logging.INFO),
        force=True,
    )

    renderer: Processor
    if log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(
    name: Optional[str] = None,
    room_id: Optional[str] = None,
    session_handle: Optional[str] = None,
) -> structlog.stdlib.BoundLogger:
    """
    Get a logger instance with optional context.

    Args:
        name: Logger name
        room_id: Room identifier for tracing
        session_handle: Collaboration session handle for tracing

    Returns:
        Configured logger instance
    """
    context: dict[str, Any] = {}
    if room_id:
        context["room_id"] = room_id
    if session_handle:
        context["session_handle"] = session_handle

    return structlog.get_logger(name, **context)
