"""Logging utilities for pofile."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

from .util.time import utc_now_iso

LOG_FILE_ENV = "POFILE_LOG_FILE"
_ROTATION_BACKUPS = 3
_JSON_LOG_MAX_BYTES = 2 * 1024 * 1024

logger = logging.getLogger("pofile")


class ConsoleFormatter(logging.Formatter):
    """Console formatter that surfaces structured payloads when available."""

    def __init__(self) -> None:
        """Set up the formatter with the standard console template."""
        super().__init__("%(levelname)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        """Render *record* optionally appending the structured payload."""
        base = super().format(record)
        payload = _extract_console_payload(record)
        if payload is None:
            return base
        try:
            payload_text = json.dumps(payload, ensure_ascii=False)
        except TypeError:
            payload_text = json.dumps(str(payload), ensure_ascii=False)
        return f"{base} {payload_text}"


def _extract_console_payload(record: logging.LogRecord) -> Any | None:
    """Return payload that should be appended to console output."""
    extra_json = getattr(record, "json", None)
    if not isinstance(extra_json, dict):
        return None
    event_name = extra_json.get("event")
    raw_message = record.msg
    if not (isinstance(raw_message, str) and isinstance(event_name, str)):
        return None
    if raw_message.strip() != event_name.strip():
        return None
    return extra_json.get("payload")


class JsonFormatter(logging.Formatter):
    """Convert log records into JSON strings."""

    def format(self, record: logging.LogRecord) -> str:
        record.message = record.getMessage()
        payload: Any = getattr(record, "json", None)
        if payload is None:
            data: dict[str, Any] = {
                "message": record.message,
                "level": record.levelname,
            }
        elif isinstance(payload, dict):
            data = dict(payload)
            data.setdefault("message", record.message)
            data.setdefault("level", record.levelname)
        else:
            data = {
                "message": record.message,
                "level": record.levelname,
                "data": payload,
            }
        data.setdefault("timestamp", utc_now_iso())
        if record.exc_info and "exc_info" not in data:
            data["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(data, ensure_ascii=False)


class JsonlHandler(RotatingFileHandler):
    """Write log records as JSON lines with built-in rotation."""

    def __init__(
        self,
        filename: Path | str,
        *,
        max_bytes: int = _JSON_LOG_MAX_BYTES,
        backup_count: int = _ROTATION_BACKUPS,
        encoding: str = "utf-8",
    ) -> None:
        """Initialise handler ensuring the log directory exists."""
        path = Path(filename)
        path.parent.mkdir(parents=True, exist_ok=True)
        super().__init__(
            path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding=encoding,
        )
        self.setFormatter(JsonFormatter())


def log_event(
    event: str,
    payload: Mapping[str, Any] | None = None,
    *,
    level: int = logging.DEBUG,
) -> None:
    """Emit *event* with a structured *payload* on the ``pofile`` logger.

    The console shows the event name followed by the payload as JSON; the
    JSON lines log receives ``{"event": ..., "payload": ...}``.
    """
    if not logger.isEnabledFor(level):
        return
    data: dict[str, Any] = {"event": event, "payload": dict(payload or {})}
    logger.log(level, event, extra={"json": data})


def _resolve_log_file(log_file: str | Path | None) -> Path | None:
    if log_file is not None:
        return Path(log_file).expanduser()
    env_file = os.environ.get(LOG_FILE_ENV)
    return Path(env_file).expanduser() if env_file else None


def configure_logging(
    level: int = logging.WARNING, *, log_file: str | Path | None = None
) -> None:
    """Configure the ``pofile`` logger once.

    A console handler is always attached. A JSON lines handler is added when
    *log_file* is given or ``POFILE_LOG_FILE`` is set.
    """
    if logger.handlers:
        return

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(ConsoleFormatter())
    logger.addHandler(stream_handler)

    json_path = _resolve_log_file(log_file)
    if json_path is not None:
        json_handler = JsonlHandler(json_path)
        json_handler.setLevel(logging.DEBUG)
        logger.addHandler(json_handler)
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(level)


__all__ = [
    "ConsoleFormatter",
    "JsonFormatter",
    "JsonlHandler",
    "configure_logging",
    "log_event",
    "logger",
]
