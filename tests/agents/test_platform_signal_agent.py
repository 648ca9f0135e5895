"""Tests for PlatformSignalAgent.

Tests cover:
- Not-applicable text checks
- Account scoring (missing, suspended, new, low ratio, restricted)
- Post scoring (tombstoned, removals, engagement)
- Handle heuristic fallback without platform data
"""

from datetime import datetime, timedelta, timezone

import pytest

from shadowban_system.agents.collaborators import (
    AccountSnapshot,
    PostSnapshot,
    StaticPlatformDataSource,
)
from shadowban_system.agents.platform_signal_agent import PlatformSignalAgent
from shadowban_system.data_management.schemas import (
    AgentStatus,
    CheckKind,
    CheckRequest,
    Severity,
)
from shadowban_system.databases.mention_database import MentionDatabase

NOW = datetime(2026, 6, 1, tzinfo=timezone.utc)


# ── Fixtures ──────────────────────────────────────────────────────────────


def full_account(**overrides) -> AccountSnapshot:
    fields = dict(
        exists=True,
        suspended=False,
        protected=False,
        created_at=NOW - timedelta(days=400),
        followers_count=1200,
        following_count=300,
        visibility_restricted=False,
    )
    fields.update(overrides)
    return AccountSnapshot(**fields)


def full_post(**overrides) -> PostSnapshot:
    fields = dict(
        exists=True,
        tombstoned=False,
        age_restricted=False,
        limited_visibility=False,
        removed=False,
        engagement_rate=0.04,
    )
    fields.update(overrides)
    return PostSnapshot(**fields)


@pytest.fixture
def agent() -> PlatformSignalAgent:
    return PlatformSignalAgent(mentions=MentionDatabase(), clock=lambda: NOW)


def account_request(username: str = "jack") -> CheckRequest:
    return CheckRequest(kind=CheckKind.ACCOUNT, platform="twitter", username=username)


# ── Account Tests ─────────────────────────────────────────────────────────


class TestAccountScoring:
    def test_good_standing(self, agent: PlatformSignalAgent) -> None:
        assessment = agent.score_account(full_account())
        assert assessment.raw_score == 0
        assert assessment.confidence == 100
        assert assessment.message == "Account in good standing"

    def test_missing_account(self, agent: PlatformSignalAgent) -> None:
        assessment = agent.score_account(AccountSnapshot(exists=False))
        assert assessment.raw_score == 100
        assert assessment.flags == ["account_missing"]

    def test_suspended(self, agent: PlatformSignalAgent) -> None:
        assert agent.score_account(full_account(suspended=True)).raw_score == 100

    def test_accumulated_signals(self, agent: PlatformSignalAgent) -> None:
        snapshot = full_account(
            created_at=NOW - timedelta(days=10),
            followers_count=5,
            following_count=500,
            visibility_restricted=True,
        )
        assessment = agent.score_account(snapshot)
        assert assessment.raw_score == 70
        assert assessment.flags == ["new_account", "low_follower_ratio", "visibility_restricted"]
        restricted = assessment.findings[-1]
        assert restricted.severity == Severity.CRITICAL

    def test_partial_coverage_lowers_confidence(self, agent: PlatformSignalAgent) -> None:
        assessment = agent.score_account(AccountSnapshot(exists=True, suspended=False))
        assert assessment.confidence == pytest.approx(200 / 7)


class TestPostScoring:
    def test_visible_post(self, agent: PlatformSignalAgent) -> None:
        assessment = agent.score_post(full_post())
        assert assessment.raw_score == 0
        assert assessment.message == "Post fully visible"

    def test_missing_post(self, agent: PlatformSignalAgent) -> None:
        assert agent.score_post(PostSnapshot(exists=False)).raw_score == 100

    def test_automod_removal(self, agent: PlatformSignalAgent) -> None:
        assessment = agent.score_post(full_post(removed=True, removed_by="automod"))
        assert assessment.raw_score == 40
        assert assessment.findings[0].code == "removed_by_automod"
        assert assessment.flags == ["removed"]

    def test_combined(self, agent: PlatformSignalAgent) -> None:
        assessment = agent.score_post(
            full_post(tombstoned=True, limited_visibility=True, engagement_rate=0.001)
        )
        assert assessment.raw_score == 100
        assert [f.code for f in assessment.findings] == [
            "tombstoned",
            "limited_visibility",
            "low_engagement",
        ]


# ── Agent Path Tests ──────────────────────────────────────────────────────


class TestPlatformSignalAgent:
    @pytest.mark.asyncio
    async def test_text_not_applicable(self, agent: PlatformSignalAgent) -> None:
        result = await agent.analyze(CheckRequest(platform="twitter", text="hello"))
        assert result.status == AgentStatus.DEGRADED
        assert result.flags == ["not_applicable"]
        assert not result.is_usable

    @pytest.mark.asyncio
    async def test_with_data_source(self) -> None:
        source = StaticPlatformDataSource(
            accounts={("twitter", "Jack"): full_account(protected=True)}
        )
        agent = PlatformSignalAgent(data_source=source, clock=lambda: NOW)
        result = await agent.analyze(account_request("JACK"))
        assert result.status == AgentStatus.COMPLETE
        assert result.raw_score == 10
        assert result.weighted_score == 2.0

    @pytest.mark.asyncio
    async def test_post_lookup_by_url(self) -> None:
        url = "https://reddit.com/r/python/comments/abc123"
        source = StaticPlatformDataSource(posts={("reddit", url): full_post(age_restricted=True)})
        agent = PlatformSignalAgent(data_source=source)
        request = CheckRequest(kind=CheckKind.POST, platform="reddit", url=url)
        result = await agent.analyze(request)
        assert result.raw_score == 20

    @pytest.mark.asyncio
    async def test_no_data_no_mentions(self) -> None:
        result = await PlatformSignalAgent().analyze(account_request())
        assert result.status == AgentStatus.DEGRADED
        assert result.confidence == 0
        assert result.flags == ["no_platform_data"]
        assert result.message == "Platform data unavailable"

    @pytest.mark.asyncio
    async def test_handle_heuristic(self, agent: PlatformSignalAgent) -> None:
        result = await agent.analyze(account_request("follow4follow_jane"))
        assert result.status == AgentStatus.DEGRADED
        assert result.confidence == 25
        assert result.raw_score == 30
        assert "suspicious_username" in result.flags

    @pytest.mark.asyncio
    async def test_unknown_account_falls_back(self) -> None:
        source = StaticPlatformDataSource()
        agent = PlatformSignalAgent(data_source=source, mentions=MentionDatabase())
        result = await agent.analyze(account_request("alice"))
        assert result.flags == ["heuristic_only"]
        assert result.raw_score == 0
