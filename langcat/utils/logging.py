"""Structured logging utility with dispatch ID support."""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any

import structlog

# Context variable carrying the id of the dispatch currently being handled
dispatch_id_var: ContextVar[int] = ContextVar("dispatch_id", default=0)


def set_dispatch_id(dispatch_id: int) -> None:
    """Set the dispatch ID for the current context."""
    dispatch_id_var.set(dispatch_id)


def add_context_info(
    logger: structlog.types.WrappedLogger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Add the dispatch ID to log events."""
    dispatch_id = dispatch_id_var.get()
    if dispatch_id:
        event_dict["dispatch_id"] = dispatch_id

    return event_dict


def add_timestamp(
    logger: structlog.types.WrappedLogger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Add ISO format timestamp to log events."""
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def configure_logging(
    level: str = "info",
    format_type: str = "json",
    stream: Any = None,
) -> None:
    """
    Configure structured logging for the application.

    Args:
        level: Log level (debug, info, warn, error)
        format_type: Output format ('json' or 'text')
        stream: Output stream (default: sys.stderr)
    """
    if stream is None:
        stream = sys.stderr

    level_map = {
        "debug": logging.DEBUG,
        "info": logging.INFO,
        "warn": logging.WARNING,
        "warning": logging.WARNING,
        "error": logging.ERROR,
    }
    log_level = level_map.get(level.lower(), logging.INFO)

    logging.basicConfig(
        format="%(message)s",
        stream=stream,
        level=log_level,
    )

    processors: list[structlog.types.Processor] = [
        structlog.stdlib.add_log_level,
        add_timestamp,
        add_context_info,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if format_type == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(stream),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """
    Get a configured logger instance.

    Args:
        name: Optional logger name for context

    Returns:
        Configured structlog logger
    """
    logger = structlog.get_logger()
    if name:
        logger = logger.bind(logger_name=name)
    return logger


# Initialize with defaults on import
configure_logging()
