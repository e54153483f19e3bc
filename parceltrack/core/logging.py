"""Structured logging setup."""

from __future__ import annotations

import logging
import sys
from typing import Optional

import structlog

from parceltrack.config import settings


def configure_logging(log_level: Optional[str] = None) -> None:
    """Route structlog events as JSON lines to stdout, filtered at ``log_level``."""
    level = (log_level or settings.log_level).upper()
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(level)),
        cache_logger_on_first_use=True,
    )


logger = structlog.get_logger("parceltrack")
