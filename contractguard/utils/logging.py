"""
Structured logging configuration using structlog.

JSON lines in production, coloured console output for local development.
Request-scoped values bound through ``structlog.contextvars`` (the request
id) are merged into every event.
"""

import logging
import sys

import structlog


def setup_logging(log_level: str = "INFO", json_format: bool = True) -> None:
    """
    Configure structlog and the standard library logger.

    Args:
        log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR)
        json_format: Emit JSON lines when True, console output otherwise
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_format:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # uvicorn and third-party libraries log through the stdlib
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )
