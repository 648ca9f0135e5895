"""Application settings using Pydantic BaseSettings for environment variable management."""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Global application settings loaded from environment variables.

    Attributes:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Log output format (json for production, console for dev)
        log_file: Optional JSON log file added alongside the primary sink
        log_rotation: Size or age at which the log file rotates
        log_retention: How long rotated log files are kept
        agent_timeout_seconds: Upper bound on a single agent's analyze() call
        max_history_items: Records kept per fingerprint before oldest are evicted
        default_platform: Platform assumed for text checks with no platform given
        history_persistence_path: Optional JSON file the history store mirrors to
    """

    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )
    log_format: str = Field(
        default="json",
        description="Log output format: json or console"
    )
    log_file: Optional[str] = Field(
        default=None,
        description="Optional path of a serialized log file"
    )
    log_rotation: str = Field(
        default="10 MB",
        description="Log file rotation threshold"
    )
    log_retention: str = Field(
        default="7 days",
        description="Retention period for rotated log files"
    )
    agent_timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        description="Per-agent analysis timeout in seconds"
    )
    max_history_items: int = Field(
        default=100,
        ge=1,
        description="History records retained per entity fingerprint"
    )
    default_platform: str = Field(
        default="twitter",
        description="Platform used when a text check does not name one"
    )
    history_persistence_path: Optional[str] = Field(
        default=None,
        description="Optional JSON file used to persist check history"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "SHADOWBAN_",
        "case_sensitive": False,
    }


# Singleton instance - import this throughout the application
settings = Settings()
