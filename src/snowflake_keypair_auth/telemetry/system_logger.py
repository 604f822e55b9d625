"""System logger for operational events.

Events are logged as dicts with an "event" key and rendered as one JSON
object per line:

    logger = get_system_logger()
    logger.info({"event": "jwt_refreshed", "account": "XY12345", "iat": 1700000000})

Never pass token strings or key material to this logger.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

SYSTEM_LOGGER_NAME = "snowflake_keypair_auth.system"


class JsonEventFormatter(logging.Formatter):
    """Render dict log messages as single-line JSON.

    Plain string messages are wrapped as {"message": ...} so third-party
    log calls on the same handler still produce valid JSON lines.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
        }
        if isinstance(record.msg, dict):
            payload.update(record.msg)
        else:
            payload["message"] = record.getMessage()
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def get_system_logger() -> logging.Logger:
    """Return the package's system logger.

    The logger has no handler of its own; it propagates to whatever the
    host application configured, or to the handler from configure_logging().
    """
    return logging.getLogger(SYSTEM_LOGGER_NAME)


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach a JSON stderr handler to the system logger.

    Idempotent: calling it again only updates the level.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR).

    Returns:
        The configured system logger.
    """
    logger = get_system_logger()
    logger.setLevel(level.upper())

    if not any(getattr(h, "_keypair_auth_handler", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(JsonEventFormatter())
        handler._keypair_auth_handler = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
        logger.propagate = False

    return logger
