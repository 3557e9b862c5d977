"""JSON-line logging for the dispatcher and harness.

Every record carries the dispatch context (`script_name`, `test_dir`, ...)
once it is bound with bind_context(), so harness and dispatcher lines can be
told apart when their stderr is interleaved. Records go to stderr; stdout
belongs to the harness.
"""
from __future__ import annotations

import json
import logging
import os
import sys
from datetime import UTC, datetime
from logging import Handler, LogRecord
from typing import Any

from nonnative.config import load_settings

# attributes every LogRecord has; anything else came in through `extra=`
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class ContextFilter(logging.Filter):
    """Stamps bound context fields onto records that don't set them."""

    def __init__(self) -> None:
        super().__init__()
        self.fields: dict[str, Any] = {}

    def filter(self, record: LogRecord) -> bool:
        for key, value in self.fields.items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True


class JsonFormatter(logging.Formatter):
    def format(self, record: LogRecord) -> str:  # type: ignore[override]
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(
            (k, v) for k, v in vars(record).items() if k not in _RECORD_ATTRS and k not in payload
        )
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


_context = ContextFilter()


def bind_context(**fields: Any) -> None:
    """Attach `fields` to every record emitted through the JSON handler."""
    _context.fields.update(fields)


def clear_context() -> None:
    _context.fields.clear()


def _level_from(level: str | int | None) -> int:
    if level is None:
        level = load_settings(dict(os.environ)).log_level
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.INFO)
    return level


def setup_logging(level: str | int | None = None) -> None:
    """Attach the JSON handler to the root logger unless one is present.

    Without an explicit level, `Settings.log_level` (LOG_LEVEL) is used.
    """
    root = logging.getLogger()
    if root.handlers:
        return
    lvl = _level_from(level)
    handler: Handler = logging.StreamHandler(stream=sys.stderr)
    handler.setLevel(lvl)
    handler.setFormatter(JsonFormatter())
    handler.addFilter(_context)
    root.setLevel(lvl)
    root.addHandler(handler)


def get_logger(name: str | None = None) -> logging.Logger:
    return logging.getLogger(name if name else __name__)
