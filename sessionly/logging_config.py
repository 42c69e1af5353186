"""
Logging configuration for the Sessionly API.

Health check requests are dropped from uvicorn access logs so that
liveness probes do not drown out session traffic.
"""

import logging
import logging.config
from typing import Any, Dict, Iterable

QUIET_PATHS = ("/health",)


class QuietPathFilter(logging.Filter):
    """Suppress uvicorn access lines for probe endpoints."""

    def __init__(self, paths: Iterable[str] = QUIET_PATHS):
        super().__init__()
        self.paths = tuple(paths)

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name != "uvicorn.access":
            return True
        # uvicorn access args: (client, method, path, http_version, status)
        args = record.args if isinstance(record.args, tuple) else ()
        if len(args) >= 3:
            return args[2] not in self.paths
        message = record.getMessage()
        return not any(f" {path} " in message for path in self.paths)


def get_logging_config(log_level: str = "INFO") -> Dict[str, Any]:
    """Get dictConfig settings; `log_level` applies to the sessionly loggers."""
    level = log_level.upper()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "quiet_paths": {"()": QuietPathFilter},
        },
        "formatters": {
            "default": {"format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"},
            "access": {"format": "%(message)s"},
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stdout",
            },
            "access": {
                "class": "logging.StreamHandler",
                "formatter": "access",
                "stream": "ext://sys.stdout",
                "filters": ["quiet_paths"],
            },
        },
        "loggers": {
            "uvicorn": {"handlers": ["default"], "level": "INFO", "propagate": False},
            "uvicorn.error": {"handlers": ["default"], "level": "INFO", "propagate": False},
            "uvicorn.access": {"handlers": ["access"], "level": "INFO", "propagate": False},
            "sessionly": {"handlers": ["default"], "level": level, "propagate": False},
        },
        "root": {"level": "WARNING", "handlers": ["default"]},
    }


def configure_logging(log_level: str = "INFO") -> None:
    logging.config.dictConfig(get_logging_config(log_level))
