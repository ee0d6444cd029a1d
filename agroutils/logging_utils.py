"""
Logging setup shared by the API, the weather service and the aggregation core.

Usage
-----
From an entrypoint (server, one-off script):

    from agroutils.logging_utils import setup_logging

    setup_logging(level="INFO", service_name="agroweather")

From a module:

    from agroutils.logging_utils import get_tagged_logger

    logger = get_tagged_logger(__name__, tag="aggregation_engine")
    logger.info("Aggregated forecast", extra={"days": 5})

Every record carries `service_name` and `tag`, so one formatter works for all
components whether or not setup_logging() has been called yet.
"""

from __future__ import annotations

import logging
import logging.config
from typing import Any, Mapping, Optional


# Early logs (before setup_logging runs) still get a timestamp and a level.
BOOTSTRAP_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"
BOOTSTRAP_DATEFMT = "%Y-%m-%d %H:%M:%S"

logging.basicConfig(
    level=logging.INFO,
    format=BOOTSTRAP_FORMAT,
    datefmt=BOOTSTRAP_DATEFMT,
)

DEFAULT_LOG_FORMAT = (
    "%(asctime)s | %(levelname)s | %(service_name)s | %(tag)s | %(name)s | %(message)s"
)
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_CONFIGURED: bool = False


class MaxLevelFilter(logging.Filter):
    """Pass only records at or below `max_level` (keeps WARNING+ off stdout)."""

    def __init__(self, max_level: int) -> None:
        super().__init__()
        self.max_level = max_level

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        return record.levelno <= self.max_level


class EnsureTagFilter(logging.Filter):
    """
    Give every record a `tag`.

    Records coming through a tagged LoggerAdapter keep their tag; plain
    loggers (uvicorn, fastapi, third-party) fall back to the last segment of
    the logger name, e.g. "agroweather.data_sources.factory" -> "factory".
    """

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        if not hasattr(record, "tag"):
            logger_name = getattr(record, "name", "")
            record.tag = logger_name.split(".")[-1] if logger_name else "-"
        return True


class ServiceNameFilter(logging.Filter):
    """Stamp a fixed `service_name` on every record that lacks one."""

    def __init__(self, service_name: Optional[str] = None) -> None:
        super().__init__()
        self._service_name = service_name or "-"

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        if not hasattr(record, "service_name"):
            record.service_name = self._service_name
        return True


def build_logging_config(
    *,
    level: str | int = "INFO",
    log_format: str = DEFAULT_LOG_FORMAT,
    date_format: str = DEFAULT_DATE_FORMAT,
    service_name: Optional[str] = None,
) -> Mapping[str, Any]:
    """
    Build the dictConfig mapping used by setup_logging().

    DEBUG and INFO go to stdout, WARNING and above go to stderr; both
    handlers share the same formatter and enrichment filters.
    """
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "ensure_tag": {"()": EnsureTagFilter},
            "service_name": {"()": ServiceNameFilter, "service_name": service_name},
            "stdout_max_info": {
                "()": MaxLevelFilter,
                "max_level": logging.INFO,
            },
        },
        "formatters": {
            "standard": {
                "format": log_format,
                "datefmt": date_format,
            },
        },
        "handlers": {
            "stdout": {
                "class": "logging.StreamHandler",
                "formatter": "standard",
                "filters": ["ensure_tag", "service_name", "stdout_max_info"],
                "level": "DEBUG",
                "stream": "ext://sys.stdout",
            },
            "stderr": {
                "class": "logging.StreamHandler",
                "formatter": "standard",
                "filters": ["ensure_tag", "service_name"],
                "level": "WARNING",
                "stream": "ext://sys.stderr",
            },
        },
        "root": {
            "level": level,
            "handlers": ["stdout", "stderr"],
        },
    }


def setup_logging(
    *,
    level: str | int = "INFO",
    log_format: str = DEFAULT_LOG_FORMAT,
    date_format: str = DEFAULT_DATE_FORMAT,
    service_name: Optional[str] = None,
    override_existing: bool = False,
) -> None:
    """
    Apply the process-wide logging configuration.

    Repeated calls are no-ops unless `override_existing` is True, so both
    run_server.py and the FastAPI app factory may call it safely.
    """
    global _CONFIGURED

    if _CONFIGURED and not override_existing:
        return

    logging.config.dictConfig(
        build_logging_config(
            level=level,
            log_format=log_format,
            date_format=date_format,
            service_name=service_name,
        )
    )
    _CONFIGURED = True


class TaggedLoggerAdapter(logging.LoggerAdapter):
    """LoggerAdapter that merges call-site `extra` with the adapter's own."""

    def process(self, msg, kwargs):
        kwargs["extra"] = {**self.extra, **(kwargs.get("extra") or {})}
        return msg, kwargs


def get_tagged_logger(
    name: str,
    *,
    tag: Optional[str] = None,
) -> TaggedLoggerAdapter:
    """
    Return an adapter whose records always carry `tag` plus any call-site `extra`.

    `tag` defaults to the last segment of `name`.
    """
    base_logger = logging.getLogger(name)
    if tag is None:
        tag = name.split(".")[-1]
    return TaggedLoggerAdapter(base_logger, {"tag": tag})
