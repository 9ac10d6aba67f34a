"""
Logging setup for the API process and the seed scripts.
Structured fields passed through ``extra`` are appended to each line.
"""

import logging
import sys

from app.core.config import settings

# Attributes every LogRecord carries; anything else came in through extra
_RECORD_FIELDS = set(vars(logging.makeLogRecord({}))) | {"message", "asctime", "taskName"}


class ExtraFieldsFormatter(logging.Formatter):
    """Plain-text formatter that renders extra fields as key=value pairs."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extras = {
            key: value
            for key, value in vars(record).items()
            if key not in _RECORD_FIELDS and not key.startswith("_")
        }
        if not extras:
            return line
        return line + " | " + " ".join(f"{key}={value}" for key, value in sorted(extras.items()))


def setup_logging() -> None:
    """
    Configure the root logger with a stdout handler.
    Safe to call more than once; the handler is replaced, not duplicated.
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(ExtraFieldsFormatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))

    # Set log levels for specific libraries
    logging.getLogger("uvicorn").setLevel(logging.INFO)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("asyncpg").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.ERROR)

    logger = logging.getLogger(__name__)
    logger.info("Logging configured", extra={"log_level": settings.LOG_LEVEL})


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for a module."""
    return logging.getLogger(name)
