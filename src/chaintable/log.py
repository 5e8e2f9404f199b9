"""Logging setup for applications embedding chaintable.

The library logs under the ``chaintable`` logger and never installs handlers
on import; call :func:`configure_logging` (or ``apply_logging_policy`` from
:mod:`chaintable.config`) to get console or rotating-file output.

Resize records carry ``old_capacity``, ``new_capacity`` and ``entries`` as
record attributes; :class:`JsonFormatter` lifts them into a ``table`` object
so growth events can be filtered without parsing the message text.
"""

from __future__ import annotations

import contextlib
import json
import logging
from logging.handlers import RotatingFileHandler
from typing import Any

LOGGER_NAME = "chaintable"
logger = logging.getLogger(LOGGER_NAME)

DEFAULT_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DEFAULT_LOG_DATEFMT = "%Y-%m-%dT%H:%M:%S"
DEFAULT_LOG_MAX_BYTES = 5_000_000
DEFAULT_LOG_BACKUP_COUNT = 5

TABLE_RECORD_FIELDS = ("old_capacity", "new_capacity", "entries")


def table_extra(old_capacity: int, new_capacity: int, entries: int) -> dict[str, int]:
    """Build the ``extra=`` mapping attached to resize records."""

    return {"old_capacity": old_capacity, "new_capacity": new_capacity, "entries": entries}


class JsonFormatter(logging.Formatter):
    """Render log records as JSON objects, with table fields under ``table``."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": self.formatTime(record, DEFAULT_LOG_DATEFMT),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        table = {name: getattr(record, name) for name in TABLE_RECORD_FIELDS if hasattr(record, name)}
        if table:
            payload["table"] = table
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        if record.stack_info:
            payload["stack"] = self.formatStack(record.stack_info)
        return json.dumps(payload, ensure_ascii=False)


def configure_logging(
    use_json: bool = False,
    log_file: str | None = None,
    *,
    level: int | str = logging.INFO,
    target: logging.Logger | str | None = None,
    max_bytes: int = DEFAULT_LOG_MAX_BYTES,
    backup_count: int = DEFAULT_LOG_BACKUP_COUNT,
) -> logging.Logger:
    """Install console (and optional rotating file) handlers on ``target``.

    ``target`` defaults to the package logger; an embedding application can
    pass its own logger (or name) to route table records through it instead.
    Returns the configured logger.
    """

    if target is None:
        configured = logger
    elif isinstance(target, str):
        configured = logging.getLogger(target)
    else:
        configured = target

    formatter: logging.Formatter
    if use_json:
        formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(DEFAULT_LOG_FORMAT, DEFAULT_LOG_DATEFMT)

    for handler in list(configured.handlers):
        with contextlib.suppress(Exception):
            handler.close()
        configured.removeHandler(handler)

    configured.setLevel(level)
    configured.propagate = False

    stream = logging.StreamHandler()
    stream.setFormatter(formatter)
    configured.addHandler(stream)

    if log_file:
        handler = RotatingFileHandler(log_file, maxBytes=max_bytes, backupCount=backup_count)
        handler.setFormatter(formatter)
        configured.addHandler(handler)
    return configured


__all__ = ["LOGGER_NAME", "JsonFormatter", "configure_logging", "logger", "table_extra"]
