"""Structured logging for mealy, tagged with the running CLI command."""

from __future__ import annotations

import logging
import sys
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any

import structlog

# CLI command propagated into every log event
command_var: ContextVar[str] = ContextVar("command", default="")


def new_session_id() -> str:
    """Generate a short identifier for a step session."""
    return str(uuid.uuid4())[:8]


def set_command(command: str) -> None:
    """Set the CLI command being run."""
    command_var.set(command)


def add_context_info(
    logger: structlog.types.WrappedLogger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Add the running CLI command to log events."""
    command = command_var.get()
    if command:
        event_dict["command"] = command

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
    level: str = "warn",
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
    log_level = level_map.get(level.lower(), logging.WARNING)

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
        Lazy structlog logger that picks up later calls to configure_logging
    """
    if name:
        return structlog.get_logger(logger_name=name)
    return structlog.get_logger()


# Initialize with defaults on import
configure_logging()
