from __future__ import annotations

import json
import logging
from enum import Enum
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

from audiotranslator.app.config import app_paths

LOG_FILENAME = "audiotranslator.log"
LOG_MAX_BYTES = 1_000_000
LOG_BACKUPS = 5

# Attributes every LogRecord carries; anything else on a record came from `extra`.
_RECORD_ATTRS = frozenset(logging.LogRecord("", 0, "", 0, "", (), None).__dict__) | {
    "message",
    "asctime",
    "taskName",
}


def _json_default(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (bytes, bytearray)):
        return f"<{len(value)} bytes>"
    if isinstance(value, Path):
        return str(value)
    return repr(value)


def event_fields(record: logging.LogRecord) -> dict[str, Any]:
    """The `extra={...}` fields attached to a log call."""
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _RECORD_ATTRS and not key.startswith("_")
    }


class JsonLineFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(event_fields(record))
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=_json_default)


class EventConsoleFormatter(logging.Formatter):
    """`HH:MM:SS LEVEL logger: event key=value ...` for --debug runs."""

    def __init__(self) -> None:
        super().__init__("%(asctime)s %(levelname)s %(name)s: %(message)s", datefmt="%H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = event_fields(record)
        if not fields:
            return line
        # Keep the traceback, if any, on the lines after the event.
        head, sep, tail = line.partition("\n")
        pairs = " ".join(f"{k}={json.dumps(v, ensure_ascii=False, default=_json_default)}" for k, v in fields.items())
        return f"{head} {pairs}{sep}{tail}"


def setup_app_logger(
    name: str = "audiotranslator",
    *,
    console: bool = False,
) -> tuple[logging.Logger, Path, Path]:
    log_dir = app_paths().config_dir / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / LOG_FILENAME

    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG if console else logging.INFO)
    logger.propagate = False
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()

    handler = RotatingFileHandler(
        filename=log_path,
        maxBytes=LOG_MAX_BYTES,
        backupCount=LOG_BACKUPS,
        encoding="utf-8",
    )
    handler.setFormatter(JsonLineFormatter(datefmt="%Y-%m-%dT%H:%M:%S"))
    logger.addHandler(handler)

    if console:
        stream = logging.StreamHandler()
        stream.setFormatter(EventConsoleFormatter())
        logger.addHandler(stream)
    return logger, log_dir, log_path
