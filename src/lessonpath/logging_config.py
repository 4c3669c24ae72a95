"""Logging setup for lessonpath.

Development output is human-readable; production output is one JSON object per
line so log shippers can parse it. Library code only ever calls ``get_logger``;
``configure_logging`` is for entrypoints.

Usage:
    from .logging_config import get_logger
    logger = get_logger(__name__)
    logger.debug("Replaced duplicate module", extra={"module_id": module.id})
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

_STANDARD_RECORD_KEYS = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "exc_info",
        "exc_text",
        "thread",
        "threadName",
        "message",
        "taskName",
    }
)


class JsonFormatter(logging.Formatter):
    """Format log records as JSON."""

    def format(self, record: logging.LogRecord) -> str:
        log_obj: dict[str, Any] = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)

        # Fields passed via extra= in the log call
        for key, value in record.__dict__.items():
            if key in _STANDARD_RECORD_KEYS or value is None:
                continue
            try:
                json.dumps(value)
                log_obj[key] = value
            except (TypeError, ValueError):
                log_obj[key] = str(value)

        return json.dumps(log_obj)


def _create_dev_formatter() -> logging.Formatter:
    return logging.Formatter("%(asctime)s %(levelname)-5s [%(name)s] %(message)s", datefmt="%H:%M:%S")


def configure_logging(*, log_level: str = "INFO", environment: str = "development", debug: bool = False) -> None:
    """Configure root logging with a single stderr handler.

    Args:
        log_level: Logging level name (DEBUG, INFO, WARNING, ERROR).
        environment: ``development`` or ``production``.
        debug: If True, use DEBUG regardless of ``log_level``.
    """
    level = logging.DEBUG if debug else getattr(logging, log_level.upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)
    # Avoid duplicate handlers when configured twice in one process.
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    if environment == "production":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(_create_dev_formatter())
    root.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Return a logger for a module name."""
    return logging.getLogger(name)
