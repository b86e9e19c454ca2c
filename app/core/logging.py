"""
Logging setup.

``LOG_FORMAT=text`` prints one readable line per record, ``LOG_FORMAT=json``
one JSON object per line. Context passed with ``extra=`` under one of
``CONTEXT_FIELDS`` is carried in both formats, e.g.::

    logger.info("Request accepted", extra={"match_id": 3, "user_id": 7})
"""
import json
import logging
import sys
from typing import Any, Dict, Optional

from app.core.config import settings

CONTEXT_FIELDS = ("method", "path", "event_id", "match_id", "user_id")

TEXT_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def record_context(record: logging.LogRecord) -> Dict[str, Any]:
    return {field: getattr(record, field) for field in CONTEXT_FIELDS if hasattr(record, field)}


class TextFormatter(logging.Formatter):
    """Plain line with ``key=value`` context appended."""

    def __init__(self):
        super().__init__(TEXT_FORMAT)

    def formatMessage(self, record: logging.LogRecord) -> str:
        line = super().formatMessage(record)
        context = record_context(record)
        if context:
            line += " [" + " ".join(f"{key}={value}" for key, value in context.items()) + "]"
        return line


class JsonLineFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "time": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(record_context(record))
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def setup_logging(level: Optional[str] = None, log_format: Optional[str] = None, stream=None) -> logging.Logger:
    """Install a single handler on the root logger. Defaults come from settings."""
    level = (level or settings.LOG_LEVEL).upper()
    log_format = log_format or settings.LOG_FORMAT

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(JsonLineFormatter() if log_format == "json" else TextFormatter())

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level, logging.INFO))

    # SQL echo and per-request HTTP lines only when debugging
    library_level = logging.DEBUG if level == "DEBUG" else logging.WARNING
    for name in ("sqlalchemy.engine", "httpx"):
        logging.getLogger(name).setLevel(library_level)

    return root_logger
