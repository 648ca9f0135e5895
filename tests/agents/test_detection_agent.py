"""Tests for DetectionAgent.

Tests cover:
- Empty input short-circuit
- Banned hashtag, shortener and throttled domain findings
- Clean text reporting
- Regex-only fallback without a signal catalog
- Detection type filtering through the config snapshot
- Adapter-extracted tokens in request content taking precedence over the text
"""

import pytest

from shadowban_system.agents.detection_agent import DetectionAgent, weighted_mean
from shadowban_system.data_management.schemas import (
    AgentConfigSnapshot,
    AgentStatus,
    CheckRequest,
    ExtractedContent,
    Severity,
)
from shadowban_system.databases.catalog import load_default_catalog


# ── Fixtures ──────────────────────────────────────────────────────────────


@pytest.fixture
def agent() -> DetectionAgent:
    return DetectionAgent(catalog=load_default_catalog())


def text_request(text: str, platform: str = "twitter", **fields) -> CheckRequest:
    return CheckRequest(platform=platform, text=text, **fields)


def codes(result) -> list[str]:
    return [f.code for f in result.findings]


# ── Catalog Tests ─────────────────────────────────────────────────────────


class TestDetection:
    @pytest.mark.asyncio
    async def test_empty_text(self, agent: DetectionAgent) -> None:
        result = await agent.analyze(text_request(""))
        assert result.raw_score == 0
        assert result.confidence == 100
        assert result.message == "No text content to analyze"
        assert result.status == AgentStatus.COMPLETE

    @pytest.mark.asyncio
    async def test_banned_hashtag(self, agent: DetectionAgent) -> None:
        result = await agent.analyze(text_request("New post #followback"))
        finding = next(f for f in result.findings if f.code == "banned_hashtag")
        assert finding.severity == Severity.HIGH
        assert finding.score_contribution == 30
        assert finding.metadata["tier"] == "banned"
        assert "banned_hashtags" in result.flags
        assert result.raw_score > 0
        assert result.confidence == 85
        assert result.weight == 25
        assert result.weighted_score == round(result.raw_score * 25 / 100, 2)

    @pytest.mark.asyncio
    async def test_link_shortener(self, agent: DetectionAgent) -> None:
        result = await agent.analyze(text_request("read this https://bit.ly/3xyz"))
        assert "link_shortener" in codes(result)
        assert "monitored_link" not in codes(result)
        assert "link_shorteners" in result.flags

    @pytest.mark.asyncio
    async def test_throttled_domain(self, agent: DetectionAgent) -> None:
        result = await agent.analyze(text_request("newsletter at https://substack.com/p/notes"))
        finding = next(f for f in result.findings if f.code == "throttled_domain")
        assert finding.severity == Severity.MEDIUM
        assert finding.metadata["token"] == "https://substack.com/p/notes"

    @pytest.mark.asyncio
    async def test_attached_urls_checked_without_text(self, agent: DetectionAgent) -> None:
        request = text_request("", urls=("https://bit.ly/abc",))
        result = await agent.analyze(request)
        assert "link_shortener" in codes(result)

    @pytest.mark.asyncio
    async def test_clean_text(self, agent: DetectionAgent) -> None:
        result = await agent.analyze(text_request("Lovely weather for a walk today"))
        assert codes(result) == ["all_clear"]
        assert result.message == "All signals clean"
        assert result.raw_score == 0

    @pytest.mark.asyncio
    async def test_detection_types_filter(self, agent: DetectionAgent) -> None:
        config = AgentConfigSnapshot().with_detection_types(["content"])
        result = await agent.analyze(text_request("New post #followback"), config)
        assert "banned_hashtag" not in codes(result)

    @pytest.mark.asyncio
    async def test_weight_override(self, agent: DetectionAgent) -> None:
        config = AgentConfigSnapshot().with_agent("detection", weight=50)
        result = await agent.analyze(text_request("New post #followback"), config)
        assert result.weight == 50


# ── Extracted Content Tests ───────────────────────────────────────────────


class TestExtractedContent:
    @pytest.mark.asyncio
    async def test_content_hashtags_checked(self, agent: DetectionAgent) -> None:
        content = ExtractedContent(hashtags=["#followback", "#f4f"])
        result = await agent.analyze(text_request("hello there", content=content))
        banned = [f for f in result.findings if f.code == "banned_hashtag"]
        assert {f.metadata["token"] for f in banned} == {"#followback", "#f4f"}
        assert result.raw_score > 0

    @pytest.mark.asyncio
    async def test_content_replaces_text_extraction(self, agent: DetectionAgent) -> None:
        request = text_request("New post #followback", content=ExtractedContent())
        result = await agent.analyze(request)
        assert "banned_hashtag" not in codes(result)

    @pytest.mark.asyncio
    async def test_content_urls_merge_attached(self, agent: DetectionAgent) -> None:
        content = ExtractedContent(urls=["https://substack.com/p/notes"])
        request = text_request("hello there", content=content, urls=("https://bit.ly/abc",))
        result = await agent.analyze(request)
        assert "throttled_domain" in codes(result)
        assert "link_shortener" in codes(result)

    @pytest.mark.asyncio
    async def test_content_emojis_counted(self, agent: DetectionAgent) -> None:
        content = ExtractedContent(emojis=["\U0001F525"] * 12)
        result = await agent.analyze(text_request("hello there", content=content))
        finding = next(f for f in result.findings if f.code == "emoji_spam")
        assert finding.metadata["count"] == 12


# ── Heuristic Fallback Tests ──────────────────────────────────────────────


class TestHeuristicFallback:
    @pytest.mark.asyncio
    async def test_without_catalog(self) -> None:
        result = await DetectionAgent().analyze(text_request("plain words"))
        assert result.status == AgentStatus.DEGRADED
        assert result.confidence == 40
        assert "catalog_unavailable" in result.flags
        assert result.is_usable

    @pytest.mark.asyncio
    async def test_hashtag_flood(self) -> None:
        text = "#a #b #c #d #e #f #g"
        result = await DetectionAgent().analyze(text_request(text))
        assert "excessive_hashtags" in codes(result)
        assert result.raw_score == 10


class TestWeightedMean:
    def test_empty(self) -> None:
        assert weighted_mean({}) == 0.0

    def test_weighted(self) -> None:
        # hashtags weigh 25, content 20
        assert weighted_mean({"hashtags": 90, "content": 0}) == pytest.approx(50.0)
