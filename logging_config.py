"""Centralized logging configuration.

This module provides:
- PlainFormatter for human-readable stderr output
- JSONFormatter for structured, one-object-per-line output
- setup_logging() to install either on the root logger

Messages follow the "[TAG] message" convention; the JSON formatter splits
the tag into its own field.
"""

import json
import logging
import re
import sys
from datetime import datetime, timezone

_TAG_PATTERN = re.compile(r'\[([A-Z_]+)\]\s*(.*)', re.DOTALL)


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        # Extract tag from message if present: [TAG] message
        tag = None
        message = record.getMessage()
        tag_match = _TAG_PATTERN.match(message)
        if tag_match:
            tag = tag_match.group(1)
            message = tag_match.group(2)

        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "tag": tag,
            "message": message,
            "module": record.module,
            "extra": {
                "function": record.funcName,
                "line": record.lineno,
            }
        }

        if record.exc_info:
            log_entry["extra"]["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry)


class PlainFormatter(logging.Formatter):
    """Plain text formatter for stderr output (local debugging)."""

    def __init__(self):
        super().__init__(
            fmt='%(asctime)s [%(levelname)s] %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )


def setup_logging(level: str = "INFO", log_format: str = "plain") -> logging.Logger:
    """Configure the root logger.

    Args:
        level: Logging level name (DEBUG, INFO, ...)
        log_format: "plain" or "json"

    Returns:
        Configured root logger.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(level.upper())
    root_logger.handlers.clear()

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(JSONFormatter() if log_format == "json" else PlainFormatter())
    root_logger.addHandler(stderr_handler)

    # Suppress noisy HTTP client logs (httpx logs every request at INFO)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    return root_logger
