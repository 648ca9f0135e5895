"""Exception taxonomy for the risk scoring pipeline.

Only ValidationError and CheckCancelled ever reach a caller. AgentFailure is
absorbed by the agent that raised it and DataUnavailable is turned into a
degraded result by the agent missing the collaborator.
"""

from typing import Optional


class ShadowBanError(Exception):
    """Base class for all errors raised by shadowban_system."""


class ValidationError(ShadowBanError, ValueError):
    """Request could not be built: empty input, bad URL or unknown platform."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class AgentFailure(ShadowBanError):
    """An exception raised inside a single agent's analysis."""

    def __init__(self, agent_id: str, message: str):
        super().__init__(f"{agent_id}: {message}")
        self.agent_id = agent_id


class DataUnavailable(ShadowBanError):
    """A database, adapter or data source required by an agent is missing."""

    def __init__(self, collaborator: str, detail: Optional[str] = None):
        message = f"{collaborator} unavailable"
        super().__init__(f"{message}: {detail}" if detail else message)
        self.collaborator = collaborator


class CheckCancelled(ShadowBanError):
    """The check request was superseded before all agents finished."""


__all__ = [
    "ShadowBanError",
    "ValidationError",
    "AgentFailure",
    "DataUnavailable",
    "CheckCancelled",
]
