"""Immutable agent configuration snapshots.

Administrative changes (disable an agent, reweight a factor, switch off a
detection type) build a new snapshot with ``with_agent``/``with_detection_types``;
a snapshot handed to a running check never changes under it.
"""

from typing import Optional

from pydantic import BaseModel, Field

from shadowban_system.config.platforms import TOKEN_KINDS


class AgentSettings(BaseModel):
    """Per-agent switches."""

    enabled: bool = True
    weight: Optional[float] = Field(
        None, ge=0.0, le=100.0, description="Overrides the agent's default factor weight"
    )

    model_config = {"frozen": True}


class AgentConfigSnapshot(BaseModel):
    """Configuration in force for one check.

    Attributes:
        agents: Settings keyed by agent id; missing ids use defaults
        detection_types: Token kinds the detection agent inspects
    """

    agents: dict[str, AgentSettings] = Field(default_factory=dict)
    detection_types: frozenset[str] = Field(default_factory=lambda: frozenset(TOKEN_KINDS))

    model_config = {"frozen": True}

    def for_agent(self, agent_id: str) -> AgentSettings:
        return self.agents.get(agent_id, AgentSettings())

    def is_enabled(self, agent_id: str) -> bool:
        return self.for_agent(agent_id).enabled

    def with_agent(self, agent_id: str, **changes) -> "AgentConfigSnapshot":
        """Return a new snapshot with ``agent_id``'s settings updated.

        Args:
            agent_id: Agent to change
            **changes: AgentSettings fields to replace (enabled, weight)

        Returns:
            A new snapshot; this one is left untouched.
        """
        current = self.for_agent(agent_id)
        updated = AgentSettings(**{**current.model_dump(), **changes})
        return self.model_copy(update={"agents": {**self.agents, agent_id: updated}})

    def with_detection_types(self, types) -> "AgentConfigSnapshot":
        unknown = set(types) - set(TOKEN_KINDS)
        if unknown:
            raise ValueError(f"Unknown detection types: {sorted(unknown)}")
        return self.model_copy(update={"detection_types": frozenset(types)})
