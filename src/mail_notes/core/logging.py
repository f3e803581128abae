"""
Logging Configuration

One stdout handler shared by the service and the libraries it runs on,
so container logs carry a single line format.
"""

import sys
from logging.config import dictConfig

from mail_notes.core.config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Library loggers with fixed levels; SQL echo stays off below WARNING.
LIBRARY_LEVELS = {
    "uvicorn": "INFO",
    "uvicorn.access": "INFO",
    "sqlalchemy.engine": "WARNING",
    "alembic": "INFO",
}


def _console_logger(level: str) -> dict:
    return {"level": level, "handlers": ["console"], "propagate": False}


def setup_logging(level: str | None = None) -> None:
    """
    Route mail_notes and library loggers to stdout.

    ``level`` overrides LOG_LEVEL for the mail_notes logger and the root.
    Loggers created before this call keep working.
    """
    log_level = (level or settings.LOG_LEVEL).upper()

    loggers = {name: _console_logger(lvl) for name, lvl in LIBRARY_LEVELS.items()}
    loggers["mail_notes"] = _console_logger(log_level)

    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {"line": {"format": LOG_FORMAT, "datefmt": DATE_FORMAT}},
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "stream": sys.stdout,
                    "formatter": "line",
                },
            },
            "root": {"level": log_level, "handlers": ["console"]},
            "loggers": loggers,
        }
    )
