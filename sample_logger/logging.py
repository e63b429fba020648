from __future__ import annotations

from contextvars import ContextVar, Token
from dataclasses import dataclass
from datetime import datetime, timezone
import json
import logging
import sys
from typing import Any, Final

_LOGGER_PREFIX: Final[str] = "sample"

# Attributes every LogRecord carries; anything else came in through `extra=`.
_RESERVED_ATTRS: Final[frozenset[str]] = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime", "service"}

_LEVEL_ALIASES: Final[dict[str, int]] = {
    "warn": logging.WARNING,
    "verbose": logging.DEBUG,
    "silly": logging.DEBUG,
    "http": logging.INFO,
}

_request_id: ContextVar[str | None] = ContextVar("sample_request_id", default=None)


@dataclass(frozen=True)
class LoggerConfig:
    level: str
    service: str


def bind_request_id(request_id: str | None) -> Token:
    """Tag every line logged in the current context with `request_id`."""

    return _request_id.set(request_id)


def reset_request_id(token: Token) -> None:
    _request_id.reset(token)


def current_request_id() -> str | None:
    return _request_id.get()


def resolve_level(level: str | int | None) -> int:
    """Map a level name in any case ("info", "WARN", ...) to a logging level.

    Unknown names fall back to INFO.
    """

    if isinstance(level, int):
        return level
    name = (level or "info").strip().lower()
    if name in _LEVEL_ALIASES:
        return _LEVEL_ALIASES[name]
    resolved = logging.getLevelName(name.upper())
    return resolved if isinstance(resolved, int) else logging.INFO


class _ServiceFilter(logging.Filter):
    """Stamp the service label on every record passing through a handler."""

    def __init__(self, service: str) -> None:
        super().__init__()
        self.service = service

    def filter(self, record: logging.LogRecord) -> bool:
        record.service = self.service
        return True


class StdoutHandler(logging.StreamHandler):
    """StreamHandler for standard output that looks `sys.stdout` up on every emit.

    Loggers are built once at import time; if `sys.stdout` is replaced later
    (pytest's capsys, a redirected console) lines follow the replacement
    instead of going to the stale object. `setStream()` pins an explicit
    stream and stops the lookup.
    """

    def __init__(self) -> None:
        logging.Handler.__init__(self)
        self._pinned = None

    @property
    def stream(self):
        return self._pinned if self._pinned is not None else sys.stdout

    @stream.setter
    def stream(self, value) -> None:
        self._pinned = value


class JsonFormatter(logging.Formatter):
    """One JSON object per line: timestamp, level, service, message (+ extras)."""

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc)
        payload: dict[str, Any] = {
            "timestamp": ts.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "level": record.levelname.lower(),
            "service": getattr(record, "service", None),
            "message": record.getMessage(),
        }
        request_id = current_request_id()
        if request_id is not None:
            payload["request_id"] = request_id
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                payload[key] = value
        if record.exc_info:
            payload["stack"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def create_logger(config: LoggerConfig) -> logging.Logger:
    """Return the `sample.<service>` logger writing JSON lines to stdout.

    Safe to call repeatedly: the previous handler is replaced, not stacked.
    """

    logger = logging.getLogger(f"{_LOGGER_PREFIX}.{config.service}")
    logger.setLevel(resolve_level(config.level))
    logger.propagate = False

    for existing in list(logger.handlers):
        logger.removeHandler(existing)

    handler = StdoutHandler()
    handler.setFormatter(JsonFormatter())
    handler.addFilter(_ServiceFilter(config.service))
    logger.addHandler(handler)
    return logger


def configure_logging(*, level: str = "info", service: str | None = None) -> None:
    """Configure root logging once, for third-party loggers such as uvicorn.

    If handlers already exist (pytest, an outer server), only the level changes.
    """

    root = logging.getLogger()
    if root.handlers:
        root.setLevel(resolve_level(level))
        return

    handler = StdoutHandler()
    handler.setFormatter(JsonFormatter())
    if service:
        handler.addFilter(_ServiceFilter(service))
    root.addHandler(handler)
    root.setLevel(resolve_level(level))
