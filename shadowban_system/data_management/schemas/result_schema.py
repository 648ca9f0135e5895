"""Agent result and finding schemas.

Every agent returns the same AgentResult shape so the orchestrator can
aggregate without knowing which agent produced what.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


class AgentStatus(str, Enum):
    """Outcome of one agent's analysis.

    COMPLETE: full analysis with all collaborators available
    DEGRADED: partial analysis, a collaborator missing or input not applicable
    ERROR: analysis failed or timed out; score and confidence are zero
    """

    COMPLETE = "complete"
    DEGRADED = "degraded"
    ERROR = "error"


class Severity(str, Enum):
    """Severity of a finding."""

    NONE = "none"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class Finding(BaseModel):
    """One evidentiary observation emitted by an agent."""

    code: str = Field(..., description="Stable machine-readable finding code")
    message: str = Field(..., description="Human-readable explanation")
    score_contribution: float = Field(
        0.0, ge=0.0, le=100.0, description="Points this finding added to the raw score"
    )
    severity: Severity = Severity.NONE
    metadata: dict[str, Any] = Field(default_factory=dict)

    model_config = {"frozen": True}

    @property
    def is_high_severity(self) -> bool:
        return self.severity in (Severity.HIGH, Severity.CRITICAL)


class AgentResult(BaseModel):
    """One agent's verdict on a check request."""

    agent_id: str
    agent_name: str
    factor: int = Field(..., ge=1, le=5)
    factor_name: str
    weight: float = Field(..., ge=0.0, le=100.0)
    raw_score: float = Field(0.0, ge=0.0, le=100.0)
    weighted_score: float = Field(0.0, ge=0.0, le=100.0)
    confidence: float = Field(0.0, ge=0.0, le=100.0)
    findings: list[Finding] = Field(default_factory=list)
    flags: list[str] = Field(default_factory=list)
    status: AgentStatus = AgentStatus.COMPLETE
    message: Optional[str] = None
    duration_ms: float = Field(0.0, ge=0.0)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "agent_id": "detection",
                    "agent_name": "Real-Time Detection Agent",
                    "factor": 4,
                    "factor_name": "Real-Time Detection",
                    "weight": 25,
                    "raw_score": 60,
                    "weighted_score": 15.0,
                    "confidence": 85,
                    "findings": [
                        {
                            "code": "banned_hashtag",
                            "message": "Banned hashtag: #followback",
                            "score_contribution": 30,
                            "severity": "high",
                        }
                    ],
                    "flags": ["banned_hashtags"],
                    "status": "complete",
                }
            ]
        }
    }

    @property
    def is_usable(self) -> bool:
        """Whether this result carries evidence the synthesis should weigh.

        Errors never count. A degraded result with zero confidence means the
        agent had nothing to look at, which is absence of evidence.
        """
        if self.status == AgentStatus.ERROR:
            return False
        if self.status == AgentStatus.DEGRADED and self.confidence <= 0:
            return False
        return True
