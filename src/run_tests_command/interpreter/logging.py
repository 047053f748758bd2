"""Logging configuration.

Uses standard library logging with either a JSON formatter or a formatter that
emits GitHub Actions workflow commands (so errors become run annotations).
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any, TextIO

_RESERVED_LOG_RECORD_ATTRS: set[str] = {
    "args",
    "asctime",
    "created",
    "exc_info",
    "exc_text",
    "filename",
    "funcName",
    "levelname",
    "levelno",
    "lineno",
    "module",
    "msecs",
    "message",
    "msg",
    "name",
    "pathname",
    "process",
    "processName",
    "relativeCreated",
    "stack_info",
    "taskName",
    "thread",
    "threadName",
}


def _extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _RESERVED_LOG_RECORD_ATTRS and not key.startswith("_")
    }


class JsonFormatter(logging.Formatter):
    """A minimal JSON formatter for logging records."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 (record)
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        extra = _extra_fields(record)
        if extra:
            payload["extra"] = extra

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


def _escape_command_data(value: str) -> str:
    # Workflow command data must be single-line.
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class ActionsFormatter(logging.Formatter):
    """Render records as GitHub Actions workflow commands.

    ERROR and above -> ``::error::``, WARNING -> ``::warning::``,
    DEBUG -> ``::debug::``, everything else is plain text.
    """

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 (record)
        text = record.getMessage()
        extra = _extra_fields(record)
        if extra:
            text = f"{text} {json.dumps(extra, ensure_ascii=False, default=str)}"
        if record.exc_info:
            text = f"{text}\n{self.formatException(record.exc_info)}"

        if record.levelno >= logging.ERROR:
            return f"::error::{_escape_command_data(text)}"
        if record.levelno >= logging.WARNING:
            return f"::warning::{_escape_command_data(text)}"
        if record.levelno <= logging.DEBUG:
            return f"::debug::{_escape_command_data(text)}"
        return text


def configure_logging(level: str, fmt: str = "json", stream: TextIO | None = None) -> None:
    """Configure root logging with JSON or GitHub Actions output (stdout by default)."""

    root = logging.getLogger()

    # Remove any existing handlers to avoid duplicate logs when re-configuring.
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(stream=stream if stream is not None else sys.stdout)
    handler.setFormatter(ActionsFormatter() if fmt == "actions" else JsonFormatter())

    root.addHandler(handler)
    root.setLevel(level.upper())

    # Keep third-party loggers reasonably quiet unless explicitly configured.
    for name in ("github", "urllib3"):
        logging.getLogger(name).setLevel(max(root.level, logging.INFO))
