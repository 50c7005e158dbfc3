"""Centralised logging utilities for imageprompt applications."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import IO, Any, Dict, Optional

from imageprompt.errors import err_invalid_log_level

__all__ = ["JsonFormatter", "configure_logging", "parse_log_level"]

_MANAGED_HANDLER_FLAG = "_imageprompt_managed_handler"

_LEVEL_NAMES = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

# Attributes present on every LogRecord; anything else came in through ``extra=``.
_RESERVED_RECORD_KEYS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__
) | {"message", "asctime", "taskName"}


def parse_log_level(name: str) -> int:
    """Map a severity name (``debug``, ``info``, ``warn``, ``error``) to a level."""

    level = _LEVEL_NAMES.get(str(name).strip().lower())
    if level is None:
        raise err_invalid_log_level(name)
    return level


class JsonFormatter(logging.Formatter):
    """Render each record as a single JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key in _RESERVED_RECORD_KEYS or key.startswith("_"):
                continue
            payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def _remove_managed_handlers(logger: logging.Logger) -> None:
    """Detach any handlers previously installed by :func:`configure_logging`."""

    for handler in list(logger.handlers):
        if getattr(handler, _MANAGED_HANDLER_FLAG, False):
            logger.removeHandler(handler)
            handler.close()


def configure_logging(
    log_name: str,
    *,
    level: int = logging.WARNING,
    as_json: bool = False,
    stream: Optional[IO[str]] = None,
) -> logging.Logger:
    """Configure and return the named logger, writing diagnostics to stderr.

    The returned logger is meant to be handed to the loader and encoder
    explicitly. It does not propagate to the root logger, so nothing here
    touches process-wide logging defaults.
    """

    logger = logging.getLogger(log_name)
    logger.setLevel(level)
    logger.propagate = False
    _remove_managed_handlers(logger)

    if as_json:
        formatter: logging.Formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(
            fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    setattr(handler, _MANAGED_HANDLER_FLAG, True)
    logger.addHandler(handler)

    return logger
