"""Logging helpers for parse-tle.

Modules obtain loggers through :func:`get_logger`; the CLI calls
:func:`configure_logging` once to install either a plain text or a JSON
handler on the package logger. :func:`log_context` binds metadata (block
index, query key, ...) that the JSON formatter attaches to every record
emitted inside the ``with`` block.
"""

from __future__ import annotations

import contextlib
import contextvars
import datetime as _dt
import json
import logging
import os
import sys
from typing import Any, Dict, FrozenSet, Iterator, Optional

__all__ = [
    "LOG_FORMATS",
    "JSONFormatter",
    "configure_logging",
    "current_context",
    "get_logger",
    "log_context",
    "resolve_level",
]

_LOGGER_NAME = "parse_tle"
_CONTEXT: contextvars.ContextVar[Dict[str, Any]] = contextvars.ContextVar(
    "parse_tle_log_context", default={}
)
_TEXT_FORMAT = "%(levelname)s: %(message)s"
LOG_FORMATS = ("text", "json")

# Attributes every LogRecord carries; anything else came in through ``extra``.
_STANDARD_ATTRS: FrozenSet[str] = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime", "taskName"}


def resolve_level(level: Optional[str | int] = None) -> int:
    """Turn a level name, number or ``None`` (environment) into an int."""

    if isinstance(level, int):
        return level
    if level is None:
        level = os.getenv("PARSE_TLE_LOG_LEVEL", "INFO")
    try:
        return int(level)
    except (TypeError, ValueError):
        numeric = logging.getLevelName(str(level).upper())
        if isinstance(numeric, int):
            return numeric
    return logging.INFO


def current_context() -> Dict[str, Any]:
    return dict(_CONTEXT.get())


class JSONFormatter(logging.Formatter):
    """Render log records as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": _dt.datetime.now(_dt.timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        context = _CONTEXT.get()
        if context:
            payload["context"] = dict(context)

        extras = {key: value for key, value in vars(record).items() if key not in _STANDARD_ATTRS}
        if extras:
            payload["extra"] = extras

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=repr)


def configure_logging(
    level: Optional[str | int] = None,
    stream: Optional[Any] = None,
    force: bool = False,
    fmt: str = "text",
) -> logging.Logger:
    """Install a handler on the ``parse_tle`` logger.

    Repeated calls are no-ops unless ``force`` is set, which replaces the
    existing handlers.
    """

    if fmt not in LOG_FORMATS:
        raise ValueError(f"unknown log format {fmt!r}; choose from {', '.join(LOG_FORMATS)}")

    logger = logging.getLogger(_LOGGER_NAME)
    if logger.handlers and not force:
        return logger
    logger.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stderr)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(_TEXT_FORMAT))

    logger.addHandler(handler)
    logger.setLevel(resolve_level(level))
    logger.propagate = False
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return ``parse_tle`` or one of its children."""

    if not name:
        return logging.getLogger(_LOGGER_NAME)
    if name == _LOGGER_NAME or name.startswith(_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_LOGGER_NAME}.{name}")


@contextlib.contextmanager
def log_context(**kwargs: Any) -> Iterator[Dict[str, Any]]:
    """Bind ``kwargs`` to every log record emitted inside the block."""

    current = dict(_CONTEXT.get())
    current.update({k: v for k, v in kwargs.items() if v is not None})
    token = _CONTEXT.set(current)
    try:
        yield current
    finally:
        _CONTEXT.reset(token)
