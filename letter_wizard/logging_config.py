# letter_wizard/logging_config.py
"""
Stderr-only JSON logging configuration.

stdout is reserved for command output (letters, tables, JSON), so every log
line goes to stderr.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

VERBOSITY_LEVELS = {
    "quiet": logging.WARNING,
    "normal": logging.INFO,
    "verbose": logging.DEBUG,
}


class JsonFormatter(logging.Formatter):
    """Formats log records as JSON for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }

        if record.exc_info:
            log_data["exc"] = self.formatException(record.exc_info)

        return json.dumps(log_data)


def configure_logging(verbosity: str = "normal") -> None:
    """
    Configure logging to output JSON to stderr only.

    Clears existing root handlers so repeated calls don't duplicate output.

    Args:
        verbosity: "quiet", "normal" or "verbose"
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JsonFormatter())

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(VERBOSITY_LEVELS.get(verbosity, logging.INFO))

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
