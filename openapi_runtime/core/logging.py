"""Structured logging setup built on structlog."""

import logging
import sys
from typing import Any

import structlog


__all__ = ["get_logger", "setup_logging"]


_NOISY_LOGGERS = ("httpx", "httpcore", "hpack")


def setup_logging(
    json_logs: bool = False,
    log_level_name: str = "INFO",
    *,
    quiet_transport: bool = True,
) -> None:
    """Configure structlog and the stdlib root logger.

    Args:
        json_logs: Render one JSON object per line instead of console output
        log_level_name: Minimum level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        quiet_transport: Raise httpx/httpcore loggers to WARNING
    """
    level = logging.getLevelName(log_level_name.upper())
    if not isinstance(level, int):
        level = logging.INFO

    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    renderer: Any
    if json_logs:
        shared_processors.append(structlog.processors.format_exc_info)
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[*shared_processors, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )

    logging.basicConfig(level=level, stream=sys.stderr, format="%(message)s", force=True)

    if quiet_transport:
        for logger_name in _NOISY_LOGGERS:
            logging.getLogger(logger_name).setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> Any:
    """Get a structlog logger; ``name`` (typically ``__name__``) is bound as ``logger``."""
    if name is None:
        return structlog.get_logger()
    return structlog.get_logger(logger=name)
