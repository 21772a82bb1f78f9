"""Structured logging helpers used at component boundaries."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

ROOT_LOGGER = "file_converter"

_RECORD_FIELDS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None)).keys()
) | {"message", "asctime", "taskName"}


class JsonFormatter(logging.Formatter):
    """Render records as one JSON object per line.

    Attributes passed through ``extra`` are merged into the payload.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key.startswith("_") or key in _RECORD_FIELDS or key in payload:
                continue
            payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def configure_logging(level: int | str = logging.INFO, json_mode: bool = False) -> logging.Logger:
    """Attach a single stderr handler to the package logger.

    Calling this again replaces the handler, so the CLI can reconfigure
    verbosity per invocation.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    handler = logging.StreamHandler(sys.stderr)
    if json_mode:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
        )
    logger.handlers[:] = [handler]
    return logger


def log_event(
    logger: logging.Logger,
    event: str,
    *,
    level: int = logging.DEBUG,
    **fields: Any,
) -> None:
    """Log ``event`` with ``fields`` attached as record attributes."""
    if not logger.isEnabledFor(level):
        return
    extra = {
        (f"field_{key}" if key in _RECORD_FIELDS else key): value
        for key, value in fields.items()
        if value is not None
    }
    extra["event"] = event
    suffix = " ".join(f"{key}={value}" for key, value in sorted(extra.items()) if key != "event")
    logger.log(level, f"{event} {suffix}".rstrip(), extra=extra)
