"""Predictive agent (factor 5): rule-based forecast of restriction risk.

Blends five components, each scored 0-100:
- temporal: high-risk calendar periods (elections, holidays, ...)
- topic: the most sensitive topic the text touches
- platform: keywords of filters the platform is known to run
- pattern: spam, engagement bait, urgency, caps and punctuation patterns
- known_issues: platform-specific practices known to be suppressed

The agent is deterministic for a given clock and never reads the results of
the other agents.
"""

import re
from datetime import datetime
from typing import Callable, Dict, List, Optional, Tuple

from shadowban_system.agents.base_agent import Assessment, RiskAgent, utc_now
from shadowban_system.config import predictive_rules as rules
from shadowban_system.data_management.schemas import (
    AgentConfigSnapshot,
    CheckRequest,
    Finding,
)
from shadowban_system.utils.text import HASHTAG_PATTERN, caps_ratio

_TOPICS = [(re.compile(p, re.IGNORECASE), level, category) for p, level, category in rules.SENSITIVE_TOPICS]
_SPAM = [(code, re.compile(p, re.IGNORECASE), risk, msg) for code, p, risk, msg in rules.SPAM_PATTERNS]
_KNOWN = {
    platform: [(code, re.compile(p, re.IGNORECASE), risk, msg) for code, p, risk, msg in issues]
    for platform, issues in rules.KNOWN_ISSUES.items()
}

Component = Tuple[float, List[Finding]]


class PredictiveAgent(RiskAgent):
    """
    Forecasts restriction risk from time, topic and platform rules.

    Attributes:
        clock: Callable returning the current UTC time
    """

    agent_id = "predictive"
    name = "Predictive Agent"
    factor = 5
    description = "Rule-based prediction from timing, topics and platform filters"

    def __init__(self, clock: Callable[[], datetime] = utc_now, weight: Optional[float] = None):
        super().__init__(weight=weight)
        self.clock = clock

    async def evaluate(self, request: CheckRequest, config: AgentConfigSnapshot) -> Assessment:
        text = request.text or ""
        platform = request.platform

        components: Dict[str, Component] = {
            "temporal": self.temporal_risk(self.clock()),
            "topic": self.topic_risk(text),
            "platform": self.platform_risk(text, platform),
            "pattern": self.pattern_risk(text),
            "known_issues": self.known_issue_risk(text, platform),
        }

        assessment = Assessment()
        fired = 0
        for name, (score, findings) in components.items():
            assessment.raw_score += rules.COMPONENT_WEIGHTS[name] * score
            if score > 0:
                fired += 1
                assessment.flag(f"{name}_risk")
            for finding in findings:
                assessment.add(finding)

        confidence = rules.BASE_CONFIDENCE + rules.COMPONENT_CONFIDENCE * fired
        if platform in rules.PLATFORM_FILTERS:
            confidence += rules.KNOWN_PLATFORM_CONFIDENCE
        assessment.confidence = max(rules.MIN_CONFIDENCE, min(rules.MAX_CONFIDENCE, confidence))
        assessment.message = (
            f"{fired} predictive component(s) fired" if fired else "No predictive risk factors"
        )
        return assessment

    def temporal_risk(self, now: datetime) -> Component:
        """Risk from the highest-multiplier calendar period containing ``now``."""
        best: Optional[Tuple[str, float]] = None
        for name, months, days, multiplier in rules.HIGH_RISK_PERIODS:
            if now.month not in months:
                continue
            if days is not None and not days[0] <= now.day <= days[1]:
                continue
            if best is None or multiplier > best[1]:
                best = (name, multiplier)

        if best is None:
            return 0.0, []
        score = round(rules.TEMPORAL_BASE * (best[1] - 1) * 2)
        return float(score), [
            self.build_finding(
                "high_risk_period",
                f"Posting during a high-risk period: {best[0]}",
                score,
                period=best[0],
                multiplier=best[1],
            )
        ]

    def topic_risk(self, text: str) -> Component:
        """Risk of the most sensitive topic mentioned; only the highest counts."""
        best: Optional[Tuple[int, str, str]] = None
        for pattern, level, category in _TOPICS:
            if pattern.search(text):
                risk = rules.TOPIC_RISK[level]
                if best is None or risk > best[0]:
                    best = (risk, level, category)

        if best is None:
            return 0.0, []
        risk, level, category = best
        return float(risk), [
            self.build_finding(
                "sensitive_topic",
                f"Sensitive topic ({category}) may trigger additional review",
                risk,
                level=level,
                category=category,
            )
        ]

    def platform_risk(self, text: str, platform: str) -> Component:
        """Risk from words of the platform's known filters appearing in the text."""
        lowered = text.lower()
        matched = []
        for filter_name in rules.PLATFORM_FILTERS.get(platform, []):
            words = filter_name.split()
            if any(re.search(r"\b" + re.escape(word) + r"\b", lowered) for word in words):
                matched.append(filter_name)

        if not matched:
            return 0.0, []
        score = min(rules.PLATFORM_FILTER_CAP, rules.PLATFORM_FILTER_RISK * len(matched))
        return float(score), [
            self.build_finding(
                "platform_filter",
                f"Content may trigger platform filters: {', '.join(matched)}",
                score,
                filters=matched,
            )
        ]

    def pattern_risk(self, text: str) -> Component:
        findings = []
        score = 0
        for code, pattern, risk, message in _SPAM:
            if pattern.search(text):
                score += risk
                findings.append(self.build_finding(code, message, risk))

        if len(text) > rules.CAPS_PATTERN_MIN_LENGTH and caps_ratio(text) > rules.CAPS_PATTERN_RATIO:
            score += rules.CAPS_PATTERN_RISK
            findings.append(
                self.build_finding(
                    "excessive_caps", "Excessive capitalization may reduce reach", rules.CAPS_PATTERN_RISK
                )
            )
        return float(min(100, score)), findings

    def known_issue_risk(self, text: str, platform: str) -> Component:
        findings = []
        score = 0
        for code, pattern, risk, message in _KNOWN.get(platform, []):
            if pattern.search(text):
                score += risk
                findings.append(self.build_finding(code, message, risk))

        if platform == "linkedin":
            hashtags = len(HASHTAG_PATTERN.findall(text))
            if hashtags > rules.LINKEDIN_HASHTAG_LIMIT:
                score += rules.LINKEDIN_HASHTAG_RISK
                findings.append(
                    self.build_finding(
                        "linkedin_hashtags",
                        f"{hashtags} hashtags; LinkedIn down-ranks posts with more than "
                        f"{rules.LINKEDIN_HASHTAG_LIMIT}",
                        rules.LINKEDIN_HASHTAG_RISK,
                        count=hashtags,
                    )
                )
        return float(min(100, score)), findings

    def get_capabilities(self) -> list[str]:
        return super().get_capabilities() + ["temporal_risk", "topic_risk", "pattern_risk"]
