"""
Logging

Human-readable lines in development, one JSON object per line in
production. Context passed with extra= (organization_id, failed_step, ...)
is copied into JSON records so provisioning failures and login attempts
can be filtered by field.
"""
import logging
import sys
from typing import Any, Dict
import json
from datetime import datetime

# Keys accepted through extra= and copied into JSON records
CONTEXT_FIELDS = (
    "organization_id",
    "user_id",
    "client",
    "path",
    "method",
    "event_type",
    "reason",
    "failed_step",
)

PLAIN_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

# Libraries that log every statement or request at INFO
QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "passlib")


class JSONFormatter(logging.Formatter):
    """Render a record as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.utcnow().isoformat() + "Z",
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}.{record.funcName}:{record.lineno}",
        }
        entry.update({
            key: getattr(record, key)
            for key in CONTEXT_FIELDS
            if getattr(record, key, None) is not None
        })
        if getattr(record, "security_event", False):
            entry["security_event"] = True
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


def setup_logging(log_level: str = "INFO", json_format: bool = False) -> None:
    """
    Configure the root logger.

    Called by create_app(); calling it again replaces the handler instead
    of stacking a second one.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter() if json_format else logging.Formatter(PLAIN_FORMAT))
    root_logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_security_event(logger: logging.Logger, event_type: str, **details: Any) -> None:
    """
    Log a security-relevant event at WARNING.

    Event types in use:
    - failed_login: wrong or missing admin password
    - invalid_session: request with a forged or expired session cookie
    - rate_limit_exceeded: login throttle hit
    """
    logger.warning(
        f"SECURITY EVENT: {event_type}",
        extra={"security_event": True, "event_type": event_type, **details}
    )
