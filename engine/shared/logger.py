"""
Logging utilities for oracle engine components.

Components log through lazily bound structlog loggers, so a later call to
:func:`configure_logging` (e.g. from ``OracleService.from_config``) takes
effect for loggers created before it.
"""

import logging
import sys

import structlog
from structlog.types import Processor


def component_logger(component: str) -> structlog.BoundLogger:
    """Get a structured logger with ``component`` bound on every event."""
    return structlog.get_logger(component, component=component)


def configure_logging(
    level: str = "INFO",
    json_format: bool = False,
) -> None:
    """Configure structured logging for the application."""
    log_level = getattr(logging, level.upper())

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=log_level)

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    if json_format:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        # Not cached: reconfiguration must reach already-created loggers
        cache_logger_on_first_use=False,
    )


configure_logging()
