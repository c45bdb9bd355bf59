"""Structured logging setup."""

import logging
import sys
from typing import Optional

import structlog

from evictcache.config import settings


def configure_logging(level: Optional[str] = None, json_logs: Optional[bool] = None) -> None:
    """
    Configure structlog on top of the standard library logging module.
    
    Args:
        level: Log level name; defaults to settings.log_level
        json_logs: Render events as JSON; defaults to settings.json_logs
    """
    if level is None:
        level = settings.log_level
    if json_logs is None:
        json_logs = settings.json_logs
    
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level.upper(), force=True)
    
    renderer = structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer()
    
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
