"""structlog setup for command-line use.

Library modules only call ``structlog.get_logger``; configuring output is
left to the entry point.
"""

import logging
import sys

import structlog


def configure_logging(verbose: bool = False, use_json: bool = False) -> None:
    """Route structured logs to stderr, keeping stdout free for documents."""
    processors: list[structlog.types.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    if use_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    level = logging.DEBUG if verbose else logging.WARNING
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )
