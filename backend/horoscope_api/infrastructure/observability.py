"""Structured Logging — JSON formatter and one-shot setup for the horoscope API.

Invariants:
    - Every line carries timestamp, level, logger, service, and message
    - Request fields (sign_id, kind, period, outcome, error_code, path) surfaced when present
    - setup_logging is idempotent: repeated lifespans never stack handlers
    - Driver loggers (sqlalchemy.engine, pymongo) pinned at WARNING unless level is DEBUG
"""

import json
import logging
from datetime import datetime, timezone

SERVICE_NAME = "horoscope-api"

_EXTRA_FIELDS = ("sign_id", "kind", "period", "outcome", "error_code", "path")
_DRIVER_LOGGERS = ("sqlalchemy.engine", "pymongo", "aiosqlite", "asyncpg")
_HANDLER_NAME = "horoscope-api-stream"


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "service": SERVICE_NAME,
            "message": record.getMessage(),
        }
        for key in _EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Configure root logging once per process."""
    root = logging.getLogger()
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    root.setLevel(numeric_level)

    if any(h.get_name() == _HANDLER_NAME for h in root.handlers):
        return

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    root.addHandler(handler)

    driver_level = logging.DEBUG if numeric_level <= logging.DEBUG else logging.WARNING
    for name in _DRIVER_LOGGERS:
        logging.getLogger(name).setLevel(driver_level)
