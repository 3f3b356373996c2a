"""Logging infrastructure for kicad_pcb.

Provides configurable levels and stamps every record with the name of the
input currently being parsed, so diagnostics from concurrent parses stay
attributable.
"""

from __future__ import annotations

import logging
import os
import sys
from contextvars import ContextVar
from typing import Any

# Name of the input being parsed (file name, URL, "<string>", ...)
source_ctx: ContextVar[str | None] = ContextVar("source", default=None)


def get_source() -> str | None:
    """Get the current parse source if available."""
    return source_ctx.get()


def setup_logging(
    level: int | str | None = None,
    format_string: str | None = None,
) -> logging.Logger:
    """Configure logging for the application.

    Args:
        level: Logging level (e.g., 'DEBUG', 'INFO', 'ERROR').
               Defaults to KICAD_PCB_LOG_LEVEL env var or 'INFO'.
        format_string: Custom log format string. Defaults to a structured format.

    Returns:
        The package logger.
    """
    if level is None:
        level = os.environ.get("KICAD_PCB_LOG_LEVEL", "INFO")
    if isinstance(level, str):
        level = level.upper()

    if format_string is None:
        format_string = "%(asctime)s [%(levelname)s] [%(name)s] [source=%(source)s] %(message)s"

    logger = logging.getLogger("kicad_pcb")
    logger.setLevel(level)
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(format_string))
    logger.addHandler(console_handler)

    return logger


class SourceLoggerAdapter(logging.LoggerAdapter[Any]):
    """Logger adapter that adds the parse source to log records."""

    def process(self, msg: str, kwargs: Any) -> tuple[str, Any]:
        extra = kwargs.get("extra")
        if extra is None:
            extra = {}
        extra.setdefault("source", get_source() or "-")
        kwargs["extra"] = extra
        return msg, kwargs


def get_logger(name: str) -> SourceLoggerAdapter:
    """Get a logger for the given module name.

    Args:
        name: The module name (e.g., __name__).

    Returns:
        A logger with parse-source context support.
    """
    logger = logging.getLogger(name)
    return SourceLoggerAdapter(logger, {})


def create_logger(name: str) -> SourceLoggerAdapter:
    """Create and return a logger for a module."""
    return get_logger(name)
