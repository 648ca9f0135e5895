"""Orchestration: request building, agent dispatch and result synthesis."""

from shadowban_system.orchestration.coordinator import (
    ApplicationContext,
    RiskCoordinator,
    build_default_context,
)
from shadowban_system.orchestration.synthesis import (
    agent_agreement,
    build_recommendations,
    collect_primary_issues,
    compute_confidence,
    compute_probability,
    determine_verdict,
    synthesize,
)

__all__ = [
    "ApplicationContext",
    "RiskCoordinator",
    "build_default_context",
    "agent_agreement",
    "build_recommendations",
    "collect_primary_issues",
    "compute_confidence",
    "compute_probability",
    "determine_verdict",
    "synthesize",
]
