"""Structured logging setup shared by every AreaPulse entry point."""

import logging
import sys
from typing import Optional

import structlog

from areapulse.config.settings import get_settings


def configure_logging(level: Optional[str] = None, json_logs: Optional[bool] = None) -> None:
    """Configure stdlib logging and structlog.

    Args:
        level: Log level name. Defaults to settings.log_level.
        json_logs: Render JSON lines instead of console output. Defaults to
            settings.log_json.
    """
    settings = get_settings()
    level = level or settings.log_level
    if json_logs is None:
        json_logs = settings.log_json

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level),
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
