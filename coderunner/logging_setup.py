"""
Structured logging configuration.
"""

import sys

import structlog

from coderunner.config import Settings


def configure_logging(settings: Settings) -> None:
    """Configure structlog for console (development) or JSON (production) output."""
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer() if settings.environment == "production"
            else structlog.dev.ConsoleRenderer()
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            0 if settings.debug else 20
        ),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )
