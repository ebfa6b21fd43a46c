from __future__ import annotations

import json
import logging
import logging.config
import os
from datetime import datetime, timezone
from typing import Any

# structured fields handlers pass through ``extra=``
EXTRA_FIELDS = (
    "request_id",
    "path",
    "method",
    "status_code",
    "latency_ms",
    "query",
    "page",
    "per_page",
    "batches",
    "items",
    "url",
    "width",
    "quality",
    "size_bytes",
    "error",
)


class JsonFormatter(logging.Formatter):
    """One JSON object per line; unknown ``extra`` keys are left out."""

    def __init__(self, fields: tuple[str, ...] = EXTRA_FIELDS):
        super().__init__()
        self.fields = fields

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        payload: dict[str, Any] = {
            "ts": created.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        payload.update({k: getattr(record, k) for k in self.fields if hasattr(record, k)})
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def logging_config(level: str) -> dict[str, Any]:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"json": {"()": JsonFormatter}},
        "handlers": {
            "stdout": {
                "class": "logging.StreamHandler",
                "formatter": "json",
                "stream": "ext://sys.stdout",
            }
        },
        "root": {"level": level, "handlers": ["stdout"]},
        # uvicorn's own handlers would print plain text; let it propagate to root
        "loggers": {
            name: {"handlers": [], "propagate": True}
            for name in ("uvicorn", "uvicorn.access", "uvicorn.error")
        },
    }


def setup_logging(level: str | None = None) -> None:
    logging.config.dictConfig(logging_config((level or os.getenv("LOG_LEVEL", "INFO")).upper()))
