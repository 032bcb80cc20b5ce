"""Logging infrastructure for Chef Engine.

Provides centralized logging with configurable format (text/JSON) and level.
Configured via environment variables:
- LOG_LEVEL: DEBUG, INFO, WARNING, ERROR (default: INFO)
- LOG_TYPE: text, json (default: text)

Generation calls attach context with `extra=`:

    logger.warning("Rate limited", extra={"model": model, "attempt": 2, "status": 429})

The JSON formatter copies those fields onto the record it emits.
"""

import json
import logging
import os
import sys
from typing import Any

# Optional record attributes (passed via `extra=`) copied into JSON output
EXTRA_FIELDS = ("model", "attempt", "status")


class JSONFormatter(logging.Formatter):
    """Formatter that outputs structured JSON."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON.

        Args:
            record: Log record to format.

        Returns:
            JSON string with timestamp, level, logger name, message, generation
            context (model, attempt, status) and optional traceback.
        """
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        # Include exception traceback if present
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Include generation context only when the caller supplied it
        for field in EXTRA_FIELDS:
            if hasattr(record, field):
                log_data[field] = getattr(record, field)

        return json.dumps(log_data)


class RichTextFormatter(logging.Formatter):
    """Formatter that outputs colored text with emoji icons.

    Generation context is appended as `[model=... attempt=... status=...]`.
    """

    # ANSI color codes
    COLORS = {
        "DEBUG": "\033[36m",      # Cyan
        "INFO": "\033[32m",       # Green
        "WARNING": "\033[33m",    # Yellow
        "ERROR": "\033[31m",      # Red
        "RESET": "\033[0m",       # Reset
    }

    # Emoji icons for each level
    ICONS = {
        "DEBUG": "🔍",
        "INFO": "ℹ️",
        "WARNING": "⚠️",
        "ERROR": "❌",
    }

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as colored text.

        Args:
            record: Log record to format.

        Returns:
            Formatted string with color codes, emoji icon and generation context.
        """
        level = record.levelname
        color = self.COLORS.get(level, self.COLORS["RESET"])
        icon = self.ICONS.get(level, "")
        reset = self.COLORS["RESET"]

        # Format: YYYY-MM-DD HH:MM:SS
        timestamp = self.formatTime(record, "%Y-%m-%d %H:%M:%S")

        # model=gemini-2.5-flash attempt=1 status=429
        context = " ".join(
            f"{field}={getattr(record, field)}" for field in EXTRA_FIELDS if hasattr(record, field)
        )
        suffix = f" [{context}]" if context else ""

        # Build message
        message = f"{color}{icon} {timestamp} {level:<8} {record.name:<20} {record.getMessage()}{suffix}"

        # Include exception traceback if present
        if record.exc_info:
            message += f"\n{self.formatException(record.exc_info)}"

        return message + reset


def get_logger(name: str) -> logging.Logger:
    """Create and configure logger instance.

    Args:
        name: Logger name, typically module name.

    Returns:
        Configured logger instance.
    """
    logger_instance = logging.getLogger(name)

    # Return existing logger if already configured
    if logger_instance.handlers:
        return logger_instance

    # Read configuration from environment
    log_level_str = os.getenv("LOG_LEVEL", "INFO").upper()
    log_type = os.getenv("LOG_TYPE", "text").lower()

    # Set log level
    log_level = getattr(logging, log_level_str, logging.INFO)
    logger_instance.setLevel(log_level)

    # Create console handler
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)

    # Structured output for log shippers, colored text for terminals
    handler.setFormatter(JSONFormatter() if log_type == "json" else RichTextFormatter())
    logger_instance.addHandler(handler)

    return logger_instance


# Module logger shared by every chef_engine module
logger = get_logger("chef_engine")

# aiohttp logs every connection at DEBUG/INFO; keep only problems
logging.getLogger("aiohttp").setLevel(logging.WARNING)
