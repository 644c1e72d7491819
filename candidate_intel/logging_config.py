"""
Logging setup - Candidate Intelligence Scoring
candidate_intel/logging_config.py

Routes both structlog loggers and stdlib ``logging`` records through one
renderer chosen by ``LOG_FORMAT`` (json for deployments, console for local runs).
"""

import logging
import sys
from typing import Optional

import structlog

from candidate_intel.config import Settings, get_settings


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Configure structlog and the root stdlib logger from settings."""
    settings = settings or get_settings()
    level = getattr(logging, settings.LOG_LEVEL)

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]

    if settings.LOG_FORMAT == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors + [structlog.stdlib.ExtraAdder()],
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)
