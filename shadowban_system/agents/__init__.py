"""Risk agents, their collaborators and the agent registry."""

from shadowban_system.agents.base_agent import Assessment, RiskAgent
from shadowban_system.agents.collaborators import (
    AccountSnapshot,
    PlatformDataSource,
    PostSnapshot,
    StaticPlatformDataSource,
    StaticVisibilityProbe,
    VisibilityProbe,
    VisibilityReport,
)
from shadowban_system.agents.detection_agent import DetectionAgent
from shadowban_system.agents.historical_agent import HistoricalAgent, analyze_history, fingerprint
from shadowban_system.agents.platform_signal_agent import PlatformSignalAgent
from shadowban_system.agents.predictive_agent import PredictiveAgent
from shadowban_system.agents.registry import AgentRegistry
from shadowban_system.agents.web_visibility_agent import WebVisibilityAgent

__all__ = [
    "Assessment",
    "RiskAgent",
    "AccountSnapshot",
    "PlatformDataSource",
    "PostSnapshot",
    "StaticPlatformDataSource",
    "StaticVisibilityProbe",
    "VisibilityProbe",
    "VisibilityReport",
    "DetectionAgent",
    "HistoricalAgent",
    "analyze_history",
    "fingerprint",
    "PlatformSignalAgent",
    "PredictiveAgent",
    "AgentRegistry",
    "WebVisibilityAgent",
]
