"""Loguru sinks for check runs.

SHADOWBAN_LOG_FORMAT picks the primary sink. ``console`` writes one line per
record to stderr, tagged with the agent and platform the record was bound to;
``json`` writes serialized records to stdout. SHADOWBAN_LOG_FILE adds a
rotating JSON file next to either, so a terminal session keeps a machine
readable trail of every check.
"""

import sys
from typing import Any, Dict, Optional

from loguru import logger

from shadowban_system.config.settings import Settings, settings

DEFAULT_COMPONENT = "shadowban"

# Bound extras shown after the component in console lines, in this order
SCOPE_KEYS = ("agent_id", "platform")

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[component]}</cyan>{extra[scope]} | <level>{message}</level>\n{exception}"
)


def console_format(record: Dict[str, Any]) -> str:
    """Loguru format function that renders a record's agent/platform scope."""
    extra = record["extra"]
    extra.setdefault("component", DEFAULT_COMPONENT)
    scope = [str(extra[key]) for key in SCOPE_KEYS if extra.get(key)]
    extra["scope"] = f" [{' '.join(scope)}]" if scope else ""
    return CONSOLE_FORMAT


def configure_logging(config: Optional[Settings] = None) -> None:
    """
    Install loguru sinks from settings.

    Args:
        config: Settings to read; the process-wide settings when None.
    """
    config = config or settings
    logger.remove()

    if config.log_format.lower() == "console":
        logger.add(
            sys.stderr,
            format=console_format,
            level=config.log_level,
            colorize=sys.stderr.isatty(),
        )
    else:
        logger.add(
            sys.stdout,
            format="{message}",
            level=config.log_level,
            serialize=True,
            diagnose=False,
        )

    if config.log_file:
        logger.add(
            config.log_file,
            level=config.log_level,
            serialize=True,
            diagnose=False,
            rotation=config.log_rotation,
            retention=config.log_retention,
            encoding="utf-8",
        )


def get_logger(component: str):
    """
    Get a logger bound to a component name.

    Example:
        >>> log = get_logger("RiskCoordinator")
        >>> log.bind(platform="twitter").info("Check started")
    """
    return logger.bind(component=component)


configure_logging()

__all__ = ["logger", "get_logger", "configure_logging", "console_format"]
