"""
Logging setup.
Readable console output while developing, JSON lines in deployed environments.
"""
from __future__ import annotations

import logging
import logging.config
from typing import Any

from app.config import Settings

TEXT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
JSON_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def build_logging_config(settings: Settings) -> dict[str, Any]:
    """Return a dictConfig mapping for the given environment."""
    level = settings.log_level or ("INFO" if settings.is_production else "DEBUG")
    formatter = "json" if settings.is_production else "text"

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "text": {"format": TEXT_FORMAT},
            "json": {
                "()": "pythonjsonlogger.json.JsonFormatter",
                "fmt": JSON_FORMAT,
                "rename_fields": {"levelname": "level", "asctime": "time"},
            },
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": formatter,
                "stream": "ext://sys.stdout",
            },
        },
        "root": {"handlers": ["default"], "level": level},
        "loggers": {
            "uvicorn.access": {"level": "WARNING" if settings.is_production else "INFO"},
            "sqlalchemy.engine": {"level": "INFO" if settings.app_debug else "WARNING"},
        },
    }


def configure_logging(settings: Settings) -> None:
    logging.config.dictConfig(build_logging_config(settings))
    logging.getLogger(__name__).debug(f"Logging configured for {settings.app_env} environment")
