"""Logging configuration for the authenticator package."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional


PACKAGE_LOGGER_NAME = "google_authenticator"

_STREAM_HANDLER_ATTR = "_is_authenticator_stream_handler"

_DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _create_stream_handler(level: int) -> logging.Handler:
    """Create the stream handler used by :func:`configure_logging`."""

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_DEFAULT_FORMAT))
    setattr(handler, _STREAM_HANDLER_ATTR, True)
    return handler


def _coerce_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def configure_logging(level: int | str = logging.INFO, logger_name: str = PACKAGE_LOGGER_NAME) -> logging.Logger:
    """Attach a stream handler to *logger_name* if one is not attached yet."""

    numeric_level = _coerce_level(level)
    logger = logging.getLogger(logger_name)

    for handler in logger.handlers:
        if getattr(handler, _STREAM_HANDLER_ATTR, False):
            handler.setLevel(numeric_level)
            break
    else:
        logger.addHandler(_create_stream_handler(numeric_level))

    logger.setLevel(numeric_level)
    return logger


class StructuredLogger:
    """Helper for emitting structured JSON logs for authenticator events."""

    def __init__(self, logger: logging.Logger, defaults: Optional[Mapping[str, Any]] = None):
        self._logger = logger
        self._defaults: Dict[str, Any] = dict(defaults or {})

    def bind(self, **extra: Any) -> "StructuredLogger":
        """Return a new logger with additional default fields."""

        merged = dict(self._defaults)
        merged.update(extra)
        return StructuredLogger(self._logger, merged)

    def _emit(self, level: int, event: str, **fields: Any) -> None:
        if not self._logger.isEnabledFor(level):
            return
        payload: Dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "event": event,
            "level": logging.getLevelName(level),
        }
        payload.update(self._defaults)
        payload.update(fields)
        message = json.dumps(payload, ensure_ascii=False, default=str)
        self._logger.log(level, message, extra={"event": event})

    def log(self, level: int, event: str, **fields: Any) -> None:
        """Emit a log entry at *level* with structured payload."""

        self._emit(level, event, **fields)

    def debug(self, event: str, **fields: Any) -> None:
        self._emit(logging.DEBUG, event, **fields)

    def info(self, event: str, **fields: Any) -> None:
        self._emit(logging.INFO, event, **fields)

    def warning(self, event: str, **fields: Any) -> None:
        self._emit(logging.WARNING, event, **fields)

    def error(self, event: str, **fields: Any) -> None:
        self._emit(logging.ERROR, event, **fields)


def structured_logger(logger_name: str, **defaults: Any) -> StructuredLogger:
    """Return a :class:`StructuredLogger` bound to *logger_name*."""

    return StructuredLogger(logging.getLogger(logger_name), defaults)
