"""Logging setup."""

import logging
import logging.config

from replayarr.config import get_log_level

LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"


def setup_logging(level: str | None = None) -> None:
    """Configure root logging for the app and quiet noisy libraries.

    Args:
        level: Log level name (None = REPLAYARR_LOG_LEVEL, default INFO)
    """
    level = (level or get_log_level()).upper()
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {"format": LOG_FORMAT},
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                },
            },
            "root": {"level": level, "handlers": ["console"]},
            "loggers": {
                # httpx logs every request at INFO
                "httpx": {"level": "WARNING"},
                "httpcore": {"level": "WARNING"},
            },
        }
    )
    logging.getLogger(__name__).debug("Logging configured at %s", level)
