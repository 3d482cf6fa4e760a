import logging

import structlog

from lingo_review.config import settings


def configure_logging() -> None:
    """Configure structlog for application-wide logging.

    Initializes stdlib logging at the configured level and routes structlog
    through it with ISO timestamps. ``log_json`` switches the console renderer
    for a JSON one so output can be shipped to a log collector.
    """
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        force=True,
    )
    renderer = (
        structlog.processors.JSONRenderer()
        if settings.log_json
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
    )


def get_logger(name: str):
    return structlog.get_logger(name)
