"""Structured logging setup via structlog.

Modules log through ``structlog.get_logger(__name__)``; the CLI calls
configure_logging() once so that events render on stderr at the chosen level.
Library events are all DEBUG. structlog's own defaults print every level to
stdout, so an application using the library directly should call
configure_logging() (or its own structlog.configure) to filter them.
"""

import logging
import sys

import structlog


def configure_logging(verbose: bool = False) -> None:
    """Configure structlog for console output.

    Args:
        verbose: Emit DEBUG events when True, otherwise only WARNING and above
    """
    level = logging.DEBUG if verbose else logging.WARNING

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
