"""Structured logging for stateful stores using structlog.

Agents and the orchestrator log through loguru (see config/logging.py). The
history store emits event-style records (``record_added``, ``history_cleared``)
that read better as structlog key/value events.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.contextvars import merge_contextvars
from structlog.processors import JSONRenderer

from shadowban_system.config.settings import settings


def configure_structured_logging() -> None:
    """
    Configure structlog processors and renderer.

    Uses:
    - Console renderer when SHADOWBAN_LOG_FORMAT=console, colored on a TTY
    - JSON renderer otherwise
    """
    processors = [
        merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if settings.log_format.lower() == "console":
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))
    else:
        processors.append(JSONRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, settings.log_level.upper(), logging.INFO)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_structured_logger(component: str, **context: Any):
    """
    Get a structlog logger bound to a component.

    Args:
        component: Component name bound as ``component``
        **context: Additional key/value context to bind

    Returns:
        Bound structlog logger

    Example:
        >>> log = get_structured_logger("HistoryStore")
        >>> log.info("record_added", key="account:twitter:jack")
    """
    return structlog.get_logger().bind(component=component, **context)


configure_structured_logging()

__all__ = ["configure_structured_logging", "get_structured_logger"]
