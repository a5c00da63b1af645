"""Logging configuration and setup."""

import json
import logging
import os
import sys
import traceback
import uuid
from datetime import datetime, timezone
from pathlib import Path

# Get log level from environment
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# File logging is opt-in
LOG_DIR = os.getenv("LOG_DIR")

# Session ID distinguishes multiple process starts on the same day
SESSION_ID = str(uuid.uuid4())[:8]

LOG_DATE = datetime.now(timezone.utc).strftime("%Y-%m-%d")
LOG_FILENAME = f"mws_api_{LOG_DATE}_{SESSION_ID}.log"

# Extra record attributes copied into the JSON payload
EXTRA_FIELDS = ("request_id", "action", "attempt", "area")


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON (UTC)."""
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        # Add exception info if present
        if record.exc_info:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": traceback.format_exception(*record.exc_info),
            }

        for field in EXTRA_FIELDS:
            if hasattr(record, field):
                log_data[field] = getattr(record, field)

        return json.dumps(log_data, default=str)


# Configure package logger once
package_logger = logging.getLogger("mws_api")
package_logger.setLevel(logging.DEBUG)

# Skip if already configured
if not package_logger.handlers:
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))
    console_handler.setFormatter(JSONFormatter())
    package_logger.addHandler(console_handler)

    if LOG_DIR:
        log_dir = Path(LOG_DIR)
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_dir / LOG_FILENAME)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(JSONFormatter())
        package_logger.addHandler(file_handler)


def setup_logger(name: str) -> logging.Logger:
    """Get logger for a module."""
    logger = logging.getLogger(name)
    logger.propagate = True
    return logger


logger = setup_logger("mws_api")
