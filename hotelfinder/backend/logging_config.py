"""Software-only simulation / demo - no real systems will be contacted or modified."""
from __future__ import annotations

import logging
from typing import Optional

import structlog

from .config import get_settings


def setup_logging(level: Optional[str] = None, log_format: Optional[str] = None) -> None:
    """Route structlog through stdlib logging, rendered as JSON lines or for a console."""
    settings = get_settings()
    level = (level or settings.log_level).upper()
    log_format = log_format or settings.log_format
    renderer = structlog.dev.ConsoleRenderer() if log_format == "console" else structlog.processors.JSONRenderer()
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.EventRenamer("message"),
            structlog.processors.dict_tracebacks,
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    structlog.contextvars.bind_contextvars(service=settings.app_name)
    logging.basicConfig(level=level, format="%(message)s")
    logging.getLogger().setLevel(level)
    # SQL driver chatter stays out of search logs
    for noisy in ("aiosqlite", "sqlalchemy.engine"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


logger = structlog.get_logger("hotelfinder")
