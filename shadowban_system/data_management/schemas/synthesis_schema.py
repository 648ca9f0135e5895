"""Synthesis schemas: the final aggregate handed back to callers."""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from shadowban_system.data_management.schemas.result_schema import AgentResult
from shadowban_system.data_management.schemas.signal_schema import SignalTier


class Verdict(str, Enum):
    """Categorical outcome derived from probability and confidence."""

    CLEAR = "CLEAR"
    LIKELY_CLEAR = "LIKELY CLEAR"
    UNCERTAIN = "UNCERTAIN"
    LIKELY_RESTRICTED = "LIKELY RESTRICTED"
    RESTRICTED = "RESTRICTED"


class RecommendationPriority(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    INFO = "info"


class Recommendation(BaseModel):
    """One actionable piece of advice."""

    priority: RecommendationPriority
    action: str
    detail: Optional[str] = None
    trigger: Optional[str] = Field(None, description="Finding code that produced this advice")


class AgentAgreement(str, Enum):
    """Bucket of the mean raw score across usable agents."""

    HIGH_RISK = "high_risk"
    MEDIUM_RISK = "medium_risk"
    LOW_RISK = "low_risk"
    CLEAR = "clear"


class Synthesis(BaseModel):
    """Aggregate risk assessment for one check request."""

    probability: int = Field(..., ge=0, le=100)
    confidence: int = Field(..., ge=0, le=100)
    verdict: Verdict
    verdict_description: str = ""
    primary_issues: list[str] = Field(default_factory=list)
    recommendations: list[Recommendation] = Field(default_factory=list)
    agent_results: list[AgentResult] = Field(default_factory=list)
    agent_agreement: AgentAgreement = AgentAgreement.CLEAR
    platform: Optional[str] = None
    kind: Optional[str] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def result_for(self, agent_id: str) -> Optional[AgentResult]:
        for result in self.agent_results:
            if result.agent_id == agent_id:
                return result
        return None

    @property
    def flags(self) -> list[str]:
        """Flags raised by any agent, de-duplicated in factor order."""
        seen: list[str] = []
        for result in self.agent_results:
            for flag in result.flags:
                if flag not in seen:
                    seen.append(flag)
        return seen


class TagVerdict(str, Enum):
    AVOID = "AVOID"
    CAUTION = "CAUTION"
    WATCH = "WATCH"
    SAFE = "SAFE"


class TagCheck(BaseModel):
    """Quick verdict for a single hashtag or cashtag."""

    tag: str
    tier: SignalTier
    verdict: TagVerdict
    category: Optional[str] = None
    notes: Optional[str] = None


class TagCheckResult(BaseModel):
    platform: str
    tags: list[TagCheck] = Field(default_factory=list)
    risk_score: int = Field(0, ge=0, le=100)

    @property
    def avoid(self) -> list[str]:
        return [t.tag for t in self.tags if t.verdict == TagVerdict.AVOID]
