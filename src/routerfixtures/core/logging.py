"""Structured logging setup.

Modules log through ``structlog.get_logger()``; this module only decides
the processors, renderer and level.
"""

from __future__ import annotations

import logging
from typing import Optional

import structlog

from routerfixtures.core.config import get_settings


def configure_logging(level: Optional[str] = None, fmt: Optional[str] = None) -> None:
    """Configure structlog from settings, with optional overrides.

    Args:
        level: Log level name. Defaults to settings.logging.level.
        fmt: "json" or "console". Defaults to settings.logging.format.
    """
    cfg = get_settings().logging
    level_name = (level or cfg.level).upper()
    renderer = (
        structlog.dev.ConsoleRenderer()
        if (fmt or cfg.format) == "console"
        else structlog.processors.JSONRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level_name)
        ),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )
