"""Structured logging configuration for Agent Council.

JSON output for production and a human-readable format for local
development.

Environment Variables:
    LOG_FORMAT: Set to "json" for JSON output, anything else for human-readable.
    LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR). Defaults to INFO.
"""

import copy
import logging
import os
import sys
from contextvars import ContextVar
from typing import Any

from pythonjsonlogger import jsonlogger

# Context variables for request-scoped data
_correlation_id: ContextVar[str | None] = ContextVar("correlation_id", default=None)
_council_id: ContextVar[str | None] = ContextVar("council_id", default=None)

LOG_FORMAT = os.getenv("LOG_FORMAT", "").lower()
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def get_correlation_id() -> str | None:
    """Get the current correlation ID from context."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None) -> None:
    """Set the correlation ID in context."""
    _correlation_id.set(correlation_id)


def get_council_id() -> str | None:
    """Get the council being acted on, if any."""
    return _council_id.get()


def set_council_id(council_id: str | None) -> None:
    """Set the council being acted on."""
    _council_id.set(council_id)


class ContextAwareJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter that includes correlation and council IDs."""

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        """Add standard fields and context to log record."""
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = self.formatTime(record, self.datefmt)
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["message"] = record.getMessage()

        correlation_id = get_correlation_id()
        if correlation_id:
            log_record["correlation_id"] = correlation_id

        council_id = get_council_id()
        if council_id:
            log_record["council_id"] = council_id


class ContextAwareFormatter(logging.Formatter):
    """Human-readable formatter that prefixes correlation and council IDs."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with context information."""
        record = copy.copy(record)

        context_parts = []

        correlation_id = get_correlation_id()
        if correlation_id:
            context_parts.append(f"[{correlation_id[:8]}]")

        council_id = get_council_id()
        if council_id:
            context_parts.append(f"[council={council_id[:8]}]")

        context_prefix = " ".join(context_parts)
        if context_prefix:
            context_prefix += " "

        record.msg = f"{context_prefix}{record.getMessage()}"
        record.args = ()

        return super().format(record)


def build_formatter(log_format: str = LOG_FORMAT) -> logging.Formatter:
    """Formatter for the given LOG_FORMAT value."""
    if log_format == "json":
        return ContextAwareJsonFormatter(
            fmt="%(timestamp)s %(level)s %(logger)s %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S%z",
        )
    return ContextAwareFormatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def setup_logging() -> None:
    """Configure the root logger.

    Call once at application startup before any logging occurs.
    """
    level = getattr(logging, LOG_LEVEL, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(build_formatter())
    root_logger.addHandler(handler)

    logging.getLogger(__name__).info(
        "Logging configured. Format: %s, Level: %s",
        "json" if LOG_FORMAT == "json" else "human-readable",
        LOG_LEVEL,
    )
