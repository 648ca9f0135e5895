"""Tests for PredictiveAgent.

Tests cover:
- Temporal risk against a fixed clock
- Topic, platform filter, pattern and known-issue components
- Raw score blend and confidence bounds
"""

from datetime import datetime, timezone

import pytest

from shadowban_system.agents.predictive_agent import PredictiveAgent
from shadowban_system.data_management.schemas import CheckRequest


def fixed_clock(month: int, day: int):
    return lambda: datetime(2026, month, day, 12, tzinfo=timezone.utc)


@pytest.fixture
def quiet_agent() -> PredictiveAgent:
    """Agent whose clock sits outside every high-risk period."""
    return PredictiveAgent(clock=fixed_clock(6, 15))


def codes(components) -> list[str]:
    return [f.code for f in components[1]]


class TestComponents:
    def test_no_period_in_june(self, quiet_agent: PredictiveAgent) -> None:
        assert quiet_agent.temporal_risk(datetime(2026, 6, 15)) == (0.0, [])

    def test_highest_period_wins(self, quiet_agent: PredictiveAgent) -> None:
        score, findings = quiet_agent.temporal_risk(datetime(2026, 11, 25))
        assert score == 20
        assert findings[0].metadata["period"] == "US Elections"

    def test_day_range(self, quiet_agent: PredictiveAgent) -> None:
        assert quiet_agent.temporal_risk(datetime(2026, 2, 20))[0] == 0
        assert quiet_agent.temporal_risk(datetime(2026, 2, 5))[0] == 8

    def test_topic_keeps_most_sensitive(self, quiet_agent: PredictiveAgent) -> None:
        score, findings = quiet_agent.topic_risk("crypto chat before the election")
        assert score == 40
        assert len(findings) == 1
        assert findings[0].metadata["category"] == "political"

    def test_platform_filter(self, quiet_agent: PredictiveAgent) -> None:
        score, findings = quiet_agent.platform_risk("this is not spam", "twitter")
        assert score == 15
        assert findings[0].code == "platform_filter"
        assert quiet_agent.platform_risk("this is not spam", "mastodon") == (0.0, [])

    def test_spam_patterns(self, quiet_agent: PredictiveAgent) -> None:
        components = quiet_agent.pattern_risk("Free giveaway, click the link!!!")
        assert "promotional_spam" in codes(components)
        assert "excessive_punctuation" in codes(components)

    def test_excessive_caps(self, quiet_agent: PredictiveAgent) -> None:
        assert "excessive_caps" in codes(quiet_agent.pattern_risk("THIS IS SO EXCITING EVERYONE"))

    def test_known_issue(self, quiet_agent: PredictiveAgent) -> None:
        components = quiet_agent.known_issue_risk("follow 4 follow anyone", "twitter")
        assert codes(components) == ["follow_for_follow"]

    def test_linkedin_hashtags(self, quiet_agent: PredictiveAgent) -> None:
        components = quiet_agent.known_issue_risk("#a #b #c #d", "linkedin")
        assert codes(components) == ["linkedin_hashtags"]
        assert components[0] == 20


class TestPredictiveAgent:
    @pytest.mark.asyncio
    async def test_quiet_text(self, quiet_agent: PredictiveAgent) -> None:
        result = await quiet_agent.analyze(CheckRequest(platform="twitter", text="Lovely day"))
        assert result.raw_score == 0
        assert result.confidence == 60
        assert result.message == "No predictive risk factors"

    @pytest.mark.asyncio
    async def test_topic_blend(self, quiet_agent: PredictiveAgent) -> None:
        result = await quiet_agent.analyze(CheckRequest(platform="twitter", text="vote today"))
        # topic weight 0.4 * 40
        assert result.raw_score == 16
        assert result.flags == ["topic_risk"]
        assert result.confidence == 65

    @pytest.mark.asyncio
    async def test_unknown_platform_confidence(self, quiet_agent: PredictiveAgent) -> None:
        result = await quiet_agent.analyze(CheckRequest(platform="mastodon", text="Lovely day"))
        assert result.confidence == 50

    @pytest.mark.asyncio
    async def test_deterministic(self) -> None:
        agent = PredictiveAgent(clock=fixed_clock(11, 3))
        request = CheckRequest(platform="twitter", text="Breaking: vote now!!!")
        first = await agent.analyze(request)
        second = await agent.analyze(request)
        assert first.raw_score == second.raw_score
        assert first.flags == second.flags
        assert "temporal_risk" in first.flags
