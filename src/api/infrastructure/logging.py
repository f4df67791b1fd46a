"""Structlog configuration for the application.

Configures structlog with colored console output for development
and JSON output for production. Tenant context bound through
``structlog.contextvars`` is merged into every event.
"""

import logging
import os
import sys

import structlog


def _resolve_level(level: str | None) -> int:
    """Map a level name (e.g. "debug") to a stdlib logging level number."""
    if not level:
        return logging.INFO
    return logging.getLevelNamesMapping().get(level.upper(), logging.INFO)


def configure_logging(level: str | None = None) -> None:
    """Configure structlog with appropriate processors.

    Uses colored console output for development (when FORCE_COLOR is set
    or running in a TTY), otherwise uses JSON output for production.

    Args:
        level: Minimum level name. Falls back to LARASUITE_LOG_LEVEL, then INFO.
    """
    # FORCE_COLOR=1 enables colors even in non-TTY environments (like Docker)
    force_color = os.environ.get("FORCE_COLOR", "").lower() in ("1", "true", "yes")
    use_colors = force_color or sys.stdout.isatty()
    min_level = _resolve_level(level or os.environ.get("LARASUITE_LOG_LEVEL"))

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if use_colors:
        processors: list[structlog.types.Processor] = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(colors=True),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(min_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
