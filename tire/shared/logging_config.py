from __future__ import annotations

import logging
import logging.config
import sys
from typing import Any

from pythonjsonlogger import jsonlogger


def get_logging_config(*, level: str, log_format: str) -> dict[str, Any]:
    formatters: dict[str, Any] = {
        "text": {
            "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
        "json": {
            "()": jsonlogger.JsonFormatter,
            "format": "%(asctime)s %(name)s %(levelname)s %(message)s %(module)s %(lineno)d",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
    }
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": formatters,
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "json" if log_format == "json" else "text",
                "stream": sys.stdout,
            }
        },
        "root": {"handlers": ["console"], "level": level},
    }


def setup_logging(*, level: str = "INFO", log_format: str = "text") -> None:
    logging.config.dictConfig(get_logging_config(level=level, log_format=log_format))
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
