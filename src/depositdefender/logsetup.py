"""
Structured JSON logging for the CLI and the HTTP service.

Library modules only create loggers with ``logging.getLogger(__name__)``;
handlers are installed here by the entry points.
"""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone

from .config import DD_LOG_LEVEL

_EXTRA_FIELDS = (
    "request_id",
    "case_id",
    "detector_id",
    "issue_ids",
    "score",
    "position",
    "report_hash",
    "validation_errors",
    "duration_ms",
)


class JSONFormatter(logging.Formatter):
    """JSON log formatter for structured logging."""

    def format(self, record):
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in _EXTRA_FIELDS:
            if hasattr(record, name):
                log_entry[name] = getattr(record, name)
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry, default=str)


def configure_logging(level: str = DD_LOG_LEVEL) -> logging.Logger:
    """Attach a single JSON stream handler to the package logger."""
    logger = logging.getLogger("depositdefender")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    if not any(isinstance(h.formatter, JSONFormatter) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(JSONFormatter())
        logger.addHandler(handler)
    return logger
