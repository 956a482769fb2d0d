"""Process-wide logging setup.

Modules log through ``logging.getLogger("wcag_mcp.<area>")``; this module
only installs the handler once at startup. Output always goes to stderr
because stdout carries the stdio protocol stream.

Example:
    >>> from wcag_mcp.foundation.logging import configure_logging
    >>> configure_logging(format="json", level="DEBUG")
"""

from __future__ import annotations

import logging
import sys
from datetime import UTC, datetime
from typing import TextIO

import orjson

ROOT_LOGGER = "wcag_mcp"

_TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class JsonFormatter(logging.Formatter):
    """JSON Lines output for log aggregation."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "event": record.getMessage(),
        }
        if record.exc_info:
            entry["exc_info"] = self.formatException(record.exc_info)
        return orjson.dumps(entry, option=orjson.OPT_NON_STR_KEYS).decode()


def configure_logging(
    format: str = "text",  # noqa: A002 - matches LoggingSettings.format
    level: str = "INFO",
    *,
    output: TextIO | None = None,
) -> logging.Logger:
    """Configure the package logger. Format: "text" (human) or "json" (machine)."""
    match format:
        case "text": formatter: logging.Formatter = logging.Formatter(_TEXT_FORMAT)
        case "json": formatter = JsonFormatter()
        case _: raise ValueError(f"Unknown format: {format}. Use 'text' or 'json'")

    handler = logging.StreamHandler(output or sys.stderr)
    handler.setFormatter(formatter)

    logger = logging.getLogger(ROOT_LOGGER)
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.propagate = False
    return logger
