"""Logging configuration for notice-file-generator."""

import logging
import sys
from typing import Any, Dict

LOGGER_NAME = "notice_generator"


def setup_logging(level: str = "INFO", structured: bool = False) -> logging.Logger:
    """
    Set up the package logger.

    Calling this again with a different level only adjusts the level; handlers
    are installed once.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        structured: Whether to use structured JSON logging

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(LOGGER_NAME)
    log_level = getattr(logging, level.upper())
    logger.setLevel(log_level)

    # Avoid duplicate handlers
    if logger.handlers:
        for handler in logger.handlers:
            handler.setLevel(log_level)
        return logger

    # stdout is reserved for the summary table
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level)

    if structured:
        formatter = StructuredFormatter()
    else:
        formatter = logging.Formatter(
            "[%(asctime)s] %(levelname)s - %(threadName)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
        )

    handler.setFormatter(formatter)
    logger.addHandler(handler)

    return logger


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        import json
        from datetime import datetime

        log_entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "thread": record.threadName,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry)


# Global logger instance
logger = setup_logging()
