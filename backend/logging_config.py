"""Logging setup: one JSON object per line so CloudWatch can index the fields."""
import json
import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Iterable

from backend.config import IS_PRODUCTION

SENSITIVE_KEYS = (
    "password",
    "token",
    "secret",
    "refreshToken",
    "accessToken",
    "idToken",
    "authorization",
)

request_id_var: ContextVar[str] = ContextVar("request_id", default="")

# Attributes every LogRecord has; anything else was passed through `extra=`
_RESERVED = set(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """Format a record as a single line of JSON."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "level": record.levelname,
            "message": record.getMessage(),
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "logger": record.name,
        }
        request_id = request_id_var.get()
        if request_id:
            entry["requestId"] = request_id

        for key, value in vars(record).items():
            if key not in _RESERVED and not key.startswith("_"):
                entry[key] = value

        if record.exc_info:
            entry["error"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


def setup_logging(level: int = None) -> None:
    """Configure logging for the application."""
    if level is None:
        level = logging.INFO if IS_PRODUCTION else logging.DEBUG

    logger = logging.getLogger()
    logger.setLevel(level)

    # Lambda keeps the process warm; don't stack handlers on re-import
    for handler in list(logger.handlers):
        if getattr(handler, "_gym_json", False):
            logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(JsonFormatter())
    console_handler._gym_json = True
    logger.addHandler(console_handler)

    # Noisy third-party loggers
    logging.getLogger("pymongo").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def format_for_logging(obj: Any, sensitive_keys: Iterable[str] = SENSITIVE_KEYS) -> Any:
    """Return a copy of obj with sensitive values replaced by [REDACTED]."""
    sensitive = [key.lower() for key in sensitive_keys]

    if isinstance(obj, dict):
        result = {}
        for key, value in obj.items():
            if any(s in str(key).lower() for s in sensitive):
                result[key] = "[REDACTED]"
            else:
                result[key] = format_for_logging(value, sensitive)
        return result

    if isinstance(obj, list):
        return [format_for_logging(item, sensitive) for item in obj]

    return obj
