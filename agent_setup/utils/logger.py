import logging
import os
import sys

import structlog

DEFAULT_LEVEL = "WARNING"


def _resolve_level(level: str) -> int:
    return logging.getLevelNamesMapping().get(level.upper(), logging.WARNING)


def configure_logging(level: str = None) -> None:
    """Configure structlog for the wizard.

    Diagnostics go to stderr so they never interleave with prompts on stdout.
    The level comes from LOGGING_LEVEL unless given explicitly.
    """
    level = level or os.getenv("LOGGING_LEVEL", DEFAULT_LEVEL)

    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.format_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.contextvars.merge_contextvars,
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ],
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
        wrapper_class=structlog.make_filtering_bound_logger(_resolve_level(level)),
    )


configure_logging()

logger: structlog.stdlib.BoundLogger = structlog.get_logger()
