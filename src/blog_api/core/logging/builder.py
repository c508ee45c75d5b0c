# src/blog_api/core/logging/builder.py
"""
Logging builder: create and apply a dictConfig logging configuration.

    setup_logging(settings)

Two jobs:
  - make_dict_config(settings): build the dictConfig mapping (formatters, filters,
    handlers, loggers) from Settings.
  - setup_logging(settings): create LOG_DIR when file logging is on, apply the
    mapping and put a RequestIdFilter on the root logger.

Handler selection:
| LOG_TO_STDOUT | LOG_DIR set    | Active handlers              |
| ------------- | -------------- | ---------------------------- |
| true          | doesn't matter | console + error_console      |
| false         | not set        | console + error_console      |
| false         | set            | console + file + error_file  |
"""

from __future__ import annotations

import logging
import logging.config
from pathlib import Path

from blog_api.utils.metadata import get_project_name

from .formatters import JsonFormatter, ColorFormatter
from .filters import RequestIdFilter, RedactFilter
from .handlers import (
    get_console_handler,
    get_file_handler,
    get_error_file_handler,
    get_error_console_handler,
)

# Settings type only (avoid calling get_settings() here to prevent import-time side effects)
from blog_api.config.settings import Settings  # noqa: F401


def _file_logging_enabled(settings: "Settings") -> bool:
    return (not settings.LOG_TO_STDOUT) and bool(settings.LOG_DIR)


def make_dict_config(settings: "Settings") -> dict:
    """
    Build the dictConfig mapping using the provided settings.

    The returned mapping includes:
      - formatters: "standard" (color in text mode) and "json"
      - filters: "request_id", "redact"
      - handlers: console, plus file/error_file or error_console
      - loggers: root, uvicorn.error, uvicorn.access, sqlalchemy.engine
    """
    formatters = {
        "standard": {
            "()": ColorFormatter if settings.LOG_FORMAT == "text" else logging.Formatter,
            "format": "%(asctime)s | %(levelname)s | %(name)s | %(request_id)s | %(message)s",
        },
        "json": {
            "()": JsonFormatter,
            "env": settings.ENV,
            "service": get_project_name(),
        },
    }

    filters = {
        "request_id": {"()": RequestIdFilter},
        "redact": {"()": RedactFilter},
    }

    handlers: dict[str, dict] = {"console": get_console_handler(settings)}

    if _file_logging_enabled(settings):
        handlers["file"] = get_file_handler(settings)
        handlers["error_file"] = get_error_file_handler(settings)
    else:
        handlers["error_console"] = get_error_console_handler(settings)

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": formatters,
        "filters": filters,
        "handlers": handlers,
        "loggers": {
            "": {
                "handlers": list(handlers.keys()),
                "level": settings.LOG_LEVEL,
                "propagate": True,
            },
            "uvicorn.error": {
                "level": settings.LOG_LEVEL,
                "handlers": list(handlers.keys()),
                "propagate": False,
            },
            "uvicorn.access": {
                "level": "INFO",
                "handlers": ["console"],
                "propagate": False,
            },
            # SQL logging may contain parameter values
            "sqlalchemy.engine": {
                "level": "DEBUG" if settings.ENABLE_SQL_LOGGING else "WARNING",
                "handlers": ["console"],
                "propagate": False,
            },
        },
    }


def setup_logging(settings: "Settings") -> None:
    """Initialize logging from settings."""
    if _file_logging_enabled(settings):
        Path(settings.LOG_DIR).mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(make_dict_config(settings))

    # Safety net so %(request_id)s never raises for records that skip handler filters.
    logging.getLogger().addFilter(RequestIdFilter())
