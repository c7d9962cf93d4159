"""Logging configuration helpers with structured output."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from logging.handlers import TimedRotatingFileHandler
from typing import Any

from .config import AppConfig

CONSOLE_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
CORE_FIELDS = ("ts", "level", "logger", "message")


class JsonFormatter(logging.Formatter):
    """One JSON object per line; ``extra_fields`` from the record become top-level keys."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "event": getattr(record, "event", record.funcName),
            "environment": getattr(record, "environment", "unknown"),
        }
        extra_fields = getattr(record, "extra_fields", None) or {}
        payload.update({key: value for key, value in extra_fields.items() if key not in CORE_FIELDS})
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class ContextFilter(logging.Filter):
    """Stamps the deployment environment and an event name on every record."""

    def __init__(self, environment: str) -> None:
        super().__init__()
        self._environment = environment

    def filter(self, record: logging.LogRecord) -> bool:
        record.environment = self._environment
        record.event = getattr(record, "event", record.funcName)
        return True


def configure_logging(config: AppConfig) -> None:
    """Configure console logging (stderr) plus an optional rotating JSON file."""
    root = logging.getLogger()
    root.setLevel(config.effective_log_level)

    for handler in list(root.handlers):
        root.removeHandler(handler)

    context_filter = ContextFilter(config.environment)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    console_handler.addFilter(context_filter)
    root.addHandler(console_handler)

    if config.log_path is None:
        return

    file_handler = TimedRotatingFileHandler(
        filename=str(config.log_path),
        when="midnight",
        backupCount=14,
        utc=True,
        encoding="utf-8",
    )
    file_handler.setFormatter(JsonFormatter())
    file_handler.addFilter(context_filter)
    root.addHandler(file_handler)
