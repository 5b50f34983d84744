"""Central logging configuration for the adapter.

One stdout handler on the root logger; every line carries the caller's log
reference (or "-" when the record was emitted outside a request). The level
comes from LOG_LEVEL and defaults to INFO. httpx request lines stay quiet
unless something goes wrong.
"""
from __future__ import annotations
import logging
import os
from logging.config import dictConfig

LOG_FORMAT = "%(asctime)s %(levelname)s:%(name)s:[%(log_ref)s] %(message)s"


class LogRefFilter(logging.Filter):
    """Give every record a `log_ref` attribute so the format never fails."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "log_ref", None):
            record.log_ref = "-"
        return True


def build_logging_config(level: str | None = None) -> dict:
    level = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {"log_ref": {"()": LogRefFilter}},
        "formatters": {"default": {"format": LOG_FORMAT}},
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "default",
                "filters": ["log_ref"],
                "stream": "ext://sys.stdout",
            }
        },
        "root": {"level": level, "handlers": ["console"]},
        "loggers": {
            "uvicorn": {"level": level, "handlers": ["console"], "propagate": False},
            "uvicorn.access": {"level": level, "handlers": ["console"], "propagate": False},
            "httpx": {"level": "WARNING"},
            "httpcore": {"level": "WARNING"},
        },
    }


def configure_logging(level: str | None = None) -> None:
    """Configure logging once; a root logger that already has handlers is left alone."""
    if logging.getLogger().handlers:
        return
    dictConfig(build_logging_config(level))


__all__ = ["LOG_FORMAT", "LogRefFilter", "build_logging_config", "configure_logging"]
