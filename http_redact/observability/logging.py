"""Structured logging configuration."""

import logging
import sys
from typing import TextIO

import structlog

from http_redact.httpclient.config import LogLevel


def configure_logging(
    log_level: LogLevel | str = LogLevel.INFO,
    output: TextIO = sys.stderr,
    json_format: bool = True,
) -> None:
    """Configure structured logging for the process.

    structlog renders events as JSON lines (or colored console output) with
    level and ISO timestamp, merging fields bound with
    ``bind_request_context``. The standard library root logger, which
    ``httpx`` logs through, is set to the same level and stream.

    Args:
        log_level: Client level name such as ``"debug"`` or ``LogLevel.WARN``.
        output: Output stream (default: stderr).
        json_format: Whether to use JSON format (default: True).
    """
    level = LogLevel(log_level).logging_level
    renderer: structlog.types.Processor = (
        structlog.processors.JSONRenderer(sort_keys=True)
        if json_format
        else structlog.dev.ConsoleRenderer(colors=True)
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=output),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=output, level=level)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a bound logger instance.

    Args:
        name: Optional logger name.

    Returns:
        Bound logger instance.
    """
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger


def bind_request_context(**fields: str) -> None:
    """Bind fields to all subsequent log messages of the current context.

    Args:
        **fields: Correlation fields such as a request or trace id.
    """
    structlog.contextvars.bind_contextvars(**fields)


def clear_request_context(*names: str) -> None:
    """Remove previously bound correlation fields."""
    structlog.contextvars.unbind_contextvars(*names)
