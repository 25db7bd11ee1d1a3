"""Logging setup, applied once when the application starts."""

import logging.config

from app.core.config import settings


def configure_logging(level: str | None = None) -> None:
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": "%(asctime)s %(levelname)s [%(name)s] %(message)s",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                },
            },
            "root": {
                "handlers": ["console"],
                "level": (level or settings.LOG_LEVEL).upper(),
            },
            "loggers": {
                # SQL echo is noisy even at INFO
                "sqlalchemy.engine": {"level": "WARNING"},
            },
        }
    )
