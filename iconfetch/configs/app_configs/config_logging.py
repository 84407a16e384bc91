"""Logging configuration"""

import logging
import sys
from logging.config import dictConfig
from typing import Any

from pythonjsonlogger.json import JsonFormatter

from iconfetch.configs import settings


def configure_logging() -> None:
    """Configure logging with MozLog style JSON or rich console output."""
    match settings.logging.format:
        case "mozlog":
            handler = ["console-mozlog"]
        case "pretty":
            handler = ["console-pretty"]
        case _:
            raise ValueError(
                f"Invalid log format: {settings.logging.format}."
                f" Should either be 'mozlog' or 'pretty'."
            )

    if settings.current_env.lower() == "production" and handler != ["console-mozlog"]:
        raise ValueError("Log format must be 'mozlog' in production")

    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "text": {
                    "format": "%(message)s",
                },
                "json": {
                    "()": GCPCompatibleJSONFormatter,
                    "fmt": "%(name)s %(levelname)s %(message)s",
                    "rename_fields": {"name": "Logger", "levelname": "Type"},
                },
            },
            "handlers": {
                "console-mozlog": {
                    "level": settings.logging.level,
                    "class": "logging.StreamHandler",
                    "formatter": "json",
                    "stream": sys.stdout,
                },
                "console-pretty": {
                    "level": settings.logging.level,
                    "class": "rich.logging.RichHandler",
                    "formatter": "text",
                },
                "uvicorn-error-handler": {
                    "level": "ERROR",
                    "class": "logging.StreamHandler",
                    "formatter": "text",
                    "stream": sys.stderr,
                },
            },
            "loggers": {
                "iconfetch": {
                    "handlers": handler,
                    "level": settings.logging.level,
                    "propagate": settings.logging.can_propagate,
                },
                "request.summary": {
                    "handlers": handler,
                    "level": settings.logging.level,
                    "propagate": settings.logging.can_propagate,
                },
                "uvicorn.error": {
                    "handlers": ["uvicorn-error-handler"],
                    "level": "ERROR",
                    "propagate": False,
                },
            },
        }
    )


class GCPCompatibleJSONFormatter(JsonFormatter):
    """JSON log formatter adding the numeric `severity` picked up by GCP."""

    STACKDRIVER_LEVEL_MAP = {
        logging.CRITICAL: 600,
        logging.ERROR: 500,
        logging.WARNING: 400,
        logging.INFO: 200,
        logging.DEBUG: 100,
        logging.NOTSET: 0,
    }

    def add_fields(
        self, log_data: dict[str, Any], record: logging.LogRecord, message_dict: dict[str, Any]
    ) -> None:
        """Add the `Timestamp` and `severity` fields to every record."""
        super().add_fields(log_data, record, message_dict)
        log_data["Timestamp"] = int(record.created * 1_000_000_000)
        log_data["severity"] = self.STACKDRIVER_LEVEL_MAP.get(record.levelno, 0)
