"""Logging setup shared by the CLI and the GUI entrypoints."""

from __future__ import annotations

import logging
import logging.config
from typing import Any, Dict

from .config import Settings

LOGGER_NAME = "PromptEvaluator"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def logging_config(settings: Settings) -> Dict[str, Any]:
    """Return the ``dictConfig`` document for ``settings``.

    Package records go to the log file and to stderr, leaving stdout to
    command output. Other libraries keep their own configuration.
    """

    level = "DEBUG" if settings.verbose else "INFO"
    formatter = settings.log_format
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "text": {"format": LOG_FORMAT},
            "json": {"()": "pythonjsonlogger.jsonlogger.JsonFormatter", "fmt": LOG_FORMAT},
        },
        "handlers": {
            "file": {
                "class": "logging.FileHandler",
                "filename": str(settings.log_path),
                "encoding": "utf-8",
                "formatter": formatter,
            },
            "console": {
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stderr",
                "formatter": formatter,
            },
        },
        "loggers": {
            LOGGER_NAME: {"handlers": ["console", "file"], "level": level, "propagate": False},
        },
    }


def configure_logging(settings: Settings) -> logging.Logger:
    settings.log_path.parent.mkdir(parents=True, exist_ok=True)
    logging.config.dictConfig(logging_config(settings))
    logger = logging.getLogger(LOGGER_NAME)
    logger.debug(
        "Logging configured",
        extra={"log_path": str(settings.log_path), "log_format": settings.log_format},
    )
    return logger


__all__ = ["LOGGER_NAME", "configure_logging", "logging_config"]
