"""Abstract base class for the five risk-factor agents.

Each agent scores one factor of shadow-ban risk for a CheckRequest:
- PlatformSignalAgent (1): platform-reported account and post state
- WebVisibilityAgent (2): search and listing visibility probes
- HistoricalAgent (3): trend over past checks of the same entity
- DetectionAgent (4): signal database matches in the content
- PredictiveAgent (5): rule-based forecast from time, topic and patterns

Agents implement evaluate(). The public analyze() wraps it with error
handling, weight overrides, timing and result building, so a failing agent
yields an error result instead of raising into the registry.
"""

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional

from loguru import logger

from shadowban_system.config.scoring import FACTORS, SEVERITY_THRESHOLDS
from shadowban_system.data_management.schemas import (
    AgentConfigSnapshot,
    AgentResult,
    AgentStatus,
    CheckRequest,
    Finding,
    Severity,
)
from shadowban_system.errors import AgentFailure


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def severity_for(score_contribution: float) -> Severity:
    """Map a finding's score contribution onto a severity."""
    for minimum, severity in SEVERITY_THRESHOLDS:
        if score_contribution >= minimum:
            return Severity(severity)
    return Severity.LOW if score_contribution > 0 else Severity.NONE


@dataclass
class Assessment:
    """Unweighted outcome of one evaluate() call.

    Attributes:
        raw_score: Factor score before weighting, clamped later
        confidence: Confidence in raw_score, clamped later
        findings: Evidence in emission order
        flags: Short machine-readable markers
        status: complete or degraded (errors come from the base class)
        message: Optional human-readable summary
    """

    raw_score: float = 0.0
    confidence: float = 0.0
    findings: List[Finding] = field(default_factory=list)
    flags: List[str] = field(default_factory=list)
    status: AgentStatus = AgentStatus.COMPLETE
    message: Optional[str] = None

    def add(self, finding: Finding, flag: Optional[str] = None) -> None:
        self.findings.append(finding)
        if flag and flag not in self.flags:
            self.flags.append(flag)

    def flag(self, flag: str) -> None:
        if flag not in self.flags:
            self.flags.append(flag)


class RiskAgent(ABC):
    """
    Abstract base defining the common interface for risk agents.

    Subclasses set the class attributes agent_id, name and factor, and
    implement evaluate(). Default weights come from the factor table.

    Attributes:
        agent_id: Stable identifier used for config and lookups
        name: Human-readable agent name
        factor: Factor number 1-5
        factor_name: Display name of the factor
        weight: Default weight before any config override
        logger: Loguru logger bound with agent context
        processed_count: Number of analyze() calls that completed
        error_count: Number of analyze() calls that failed
    """

    agent_id: str = ""
    name: str = ""
    factor: int = 0
    description: str = ""

    def __init__(self, weight: Optional[float] = None):
        """
        Initialize agent identity from its factor.

        Args:
            weight: Optional default weight replacing the factor table value
        """
        self.factor_name, default_weight = FACTORS[self.factor]
        self.weight = float(default_weight if weight is None else weight)
        self.logger = logger.bind(
            component=self.__class__.__name__,
            agent_id=self.agent_id,
            agent_name=self.name,
        )
        self.processed_count: int = 0
        self.error_count: int = 0

    def effective_weight(self, config: Optional[AgentConfigSnapshot] = None) -> float:
        if config is not None:
            override = config.for_agent(self.agent_id).weight
            if override is not None:
                return override
        return self.weight

    @abstractmethod
    async def evaluate(self, request: CheckRequest, config: AgentConfigSnapshot) -> Assessment:
        """
        Score the request for this agent's factor.

        Args:
            request: Immutable check request
            config: Configuration snapshot in force for this check

        Returns:
            Assessment with raw score, confidence and findings
        """
        pass

    async def analyze(
        self,
        request: CheckRequest,
        config: Optional[AgentConfigSnapshot] = None,
    ) -> AgentResult:
        """
        Run evaluate() and convert the outcome to an AgentResult.

        Never raises for failures inside the agent: any exception becomes a
        result with status error, zero score and zero confidence.

        Args:
            request: Immutable check request
            config: Optional configuration snapshot (defaults apply if None)

        Returns:
            AgentResult for this agent's factor
        """
        config = config or AgentConfigSnapshot()
        weight = self.effective_weight(config)
        started = time.perf_counter()

        try:
            assessment = await self.evaluate(request, config)
        except Exception as e:
            self.error_count += 1
            failure = e if isinstance(e, AgentFailure) else AgentFailure(
                self.agent_id, str(e) or type(e).__name__
            )
            self.logger.bind(error=str(failure), platform=request.platform).exception(
                "Agent analysis failed"
            )
            return self.error_result(
                f"Analysis failed: {failure}",
                weight=weight,
                duration_ms=(time.perf_counter() - started) * 1000,
            )

        self.processed_count += 1
        result = self.build_result(
            assessment,
            weight=weight,
            duration_ms=(time.perf_counter() - started) * 1000,
        )
        self.logger.debug(
            "Agent analysis complete",
            raw_score=result.raw_score,
            confidence=result.confidence,
            status=result.status.value,
        )
        return result

    def build_result(
        self,
        assessment: Assessment,
        weight: Optional[float] = None,
        duration_ms: float = 0.0,
    ) -> AgentResult:
        """Clamp scores, apply the weight and fill identity fields."""
        weight = self.weight if weight is None else weight
        raw_score = round(clamp(assessment.raw_score), 2)
        return AgentResult(
            agent_id=self.agent_id,
            agent_name=self.name,
            factor=self.factor,
            factor_name=self.factor_name,
            weight=weight,
            raw_score=raw_score,
            weighted_score=round(raw_score * weight / 100, 2),
            confidence=round(clamp(assessment.confidence), 2),
            findings=list(assessment.findings),
            flags=list(assessment.flags),
            status=assessment.status,
            message=assessment.message,
            duration_ms=max(0.0, duration_ms),
        )

    def error_result(
        self,
        message: str,
        weight: Optional[float] = None,
        duration_ms: float = 0.0,
    ) -> AgentResult:
        """Build the zero-score result reported for a failed or timed-out agent."""
        return self.build_result(
            Assessment(status=AgentStatus.ERROR, message=message),
            weight=weight,
            duration_ms=duration_ms,
        )

    @staticmethod
    def build_finding(
        code: str,
        message: str,
        score_contribution: float = 0.0,
        severity: Optional[Severity] = None,
        **metadata,
    ) -> Finding:
        """Build a Finding, deriving severity from the contribution if not given."""
        contribution = clamp(score_contribution)
        return Finding(
            code=code,
            message=message,
            score_contribution=contribution,
            severity=severity or severity_for(contribution),
            metadata=metadata,
        )

    @staticmethod
    def not_applicable(message: str) -> Assessment:
        """Assessment for input this agent has nothing to say about."""
        return Assessment(
            status=AgentStatus.DEGRADED,
            confidence=0.0,
            flags=["not_applicable"],
            message=message,
        )

    def get_capabilities(self) -> list[str]:
        """
        Return agent capabilities.

        Subclasses extend this with their specific checks.

        Returns:
            List of capability identifiers
        """
        return ["risk_scoring", f"factor_{self.factor}"]

    def get_stats(self) -> dict:
        """
        Return processing statistics.

        Returns:
            Dict with processed_count, error_count, and error_rate.
        """
        total = self.processed_count + self.error_count
        error_rate = self.error_count / total if total > 0 else 0.0
        return {
            "processed_count": self.processed_count,
            "error_count": self.error_count,
            "error_rate": error_rate,
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(factor={self.factor}, weight={self.weight})"
