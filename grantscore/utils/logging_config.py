"""Logging configuration."""

import json
import logging
from pathlib import Path
from typing import Optional

LOGGER_NAME = "grantscore"

# Record attributes copied into JSON logs when a call site passes them via `extra`
CONTEXT_FIELDS = ("draft_id", "template_id", "grant_id", "field_name")

CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class JsonFormatter(logging.Formatter):
    """One JSON object per record, with draft/template context when present."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": self.formatTime(record, DATE_FORMAT),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value:
                entry[field] = value
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def setup_logging(
    log_file: Optional[Path] = None,
    log_level: str = "INFO",
    json_logs: bool = False,
) -> logging.Logger:
    """Configure the grantscore logger for a CLI run.

    Replaces any handlers from an earlier call, so commands can call this
    unconditionally.

    Args:
        log_file: Also write records here (optional)
        log_level: Level name, case-insensitive
        json_logs: Write the file log as JSON lines

    Returns:
        The configured package logger
    """
    level = log_level.upper()

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)

    plain = logging.Formatter(CONSOLE_FORMAT, datefmt=DATE_FORMAT)

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(plain)
    logger.addHandler(console)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(JsonFormatter() if json_logs else plain)
        logger.addHandler(file_handler)

    logger.propagate = False

    # requests' connection pool chatter drowns out per-field completion logs
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get the grantscore logger, or one of its children."""
    if name:
        return logging.getLogger(f"{LOGGER_NAME}.{name}")
    return logging.getLogger(LOGGER_NAME)
