"""Structured logging formatter implementation."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, override

# Attributes every LogRecord carries; anything else came in through ``extra``
_STANDARD_ATTRS: frozenset[str] = frozenset(
    {
        "name", "msg", "args", "levelname", "levelno", "pathname",
        "filename", "module", "lineno", "funcName", "created",
        "msecs", "relativeCreated", "thread", "threadName", "taskName",
        "processName", "process", "exc_info", "exc_text", "stack_info",
        "message", "asctime",
    }
)


class LogFormat(str, Enum):
    """Supported log output formats."""

    KEYVALUE = "keyvalue"
    JSON = "json"


class StructuredFormatter(logging.Formatter):
    """Render log records as key-value pairs or single-line JSON.

    Fields passed through ``extra={...}`` are appended after the standard
    fields, so scan context such as paths and sizes stays machine-readable.
    """

    def __init__(self, format_type: LogFormat = LogFormat.KEYVALUE) -> None:
        super().__init__()
        self.format_type: LogFormat = format_type

    @override
    def format(self, record: logging.LogRecord) -> str:
        log_data = self._build_log_data(record)
        if self.format_type == LogFormat.JSON:
            return json.dumps(log_data, ensure_ascii=False, separators=(",", ":"))
        return " ".join(self._format_pair(key, value) for key, value in log_data.items())

    def _build_log_data(self, record: logging.LogRecord) -> dict[str, Any]:
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created).strftime("%Y-%m-%d %H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key, value in record.__dict__.items():
            if key not in _STANDARD_ATTRS and not key.startswith("_"):
                log_data[key] = self._serialize_value(value)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return log_data

    def _format_pair(self, key: str, value: Any) -> str:
        if isinstance(value, (int, float)):
            return f"{key}={value}"
        if value is None:
            return f"{key}=null"
        escaped = str(value).replace("\\", "\\\\").replace('"', '\\"')
        return f'{key}="{escaped}"'

    def _serialize_value(self, value: Any) -> Any:
        if isinstance(value, (str, int, float, bool, type(None))):
            return value
        if isinstance(value, (list, tuple)):
            return [self._serialize_value(item) for item in value]
        if isinstance(value, dict):
            return {str(k): self._serialize_value(v) for k, v in value.items()}
        if isinstance(value, Path):
            return str(value)
        return str(value)
