"""Tests for AgentRegistry.

Tests cover:
- Deferred registration and idempotent initialize()
- Concurrent dispatch with results in factor order
- Failure isolation: crashing and timed-out agents
- Cancellation before and during a pass
- Config-driven enable/disable and weight totals
- Statistics
- Timeout taken from settings only when none is given
"""

import asyncio

import pytest

from shadowban_system.agents.base_agent import Assessment, RiskAgent
from shadowban_system.agents.registry import AgentRegistry
from shadowban_system.config.settings import settings
from shadowban_system.data_management.schemas import (
    AgentConfigSnapshot,
    AgentStatus,
    CheckRequest,
)
from shadowban_system.errors import CheckCancelled


class StubAgent(RiskAgent):
    """Agent returning a fixed score after an optional delay."""

    name = "Stub Agent"

    def __init__(self, agent_id: str, factor: int, score: float = 50, delay: float = 0.0, fail: bool = False):
        self.agent_id = agent_id
        self.factor = factor
        super().__init__()
        self.score = score
        self.delay = delay
        self.fail = fail

    async def evaluate(self, request, config) -> Assessment:
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail:
            raise RuntimeError("boom")
        return Assessment(raw_score=self.score, confidence=80)


# ── Fixtures ──────────────────────────────────────────────────────────────


@pytest.fixture
def request_() -> CheckRequest:
    return CheckRequest(platform="twitter", text="hello")


@pytest.fixture
def registry() -> AgentRegistry:
    registry = AgentRegistry(timeout_seconds=1.0)
    for factor in range(1, 6):
        registry.register(StubAgent(f"agent_{factor}", factor))
    registry.initialize()
    return registry


# ── Registration Tests ────────────────────────────────────────────────────


class TestRegistration:
    def test_registration_deferred_until_initialize(self) -> None:
        registry = AgentRegistry()
        registry.register(StubAgent("a", 1))
        assert registry.get_all() == ()
        assert registry.get_statistics()["pending_agents"] == 1

        registry.initialize()
        assert registry.initialized
        assert [a.agent_id for a in registry.get_all()] == ["a"]

    def test_initialize_idempotent(self, registry: AgentRegistry) -> None:
        registry.initialize()
        assert len(registry.get_all()) == 5

    def test_replace_same_id(self, registry: AgentRegistry) -> None:
        replacement = StubAgent("agent_4", 4, score=10)
        registry.register(replacement)
        assert registry.get("agent_4") is replacement
        assert len(registry.get_all()) == 5

    def test_factor_lookup(self, registry: AgentRegistry) -> None:
        assert registry.has_all_factors()
        assert [a.agent_id for a in registry.get_by_factor(3)] == ["agent_3"]

    def test_total_weight(self, registry: AgentRegistry) -> None:
        assert registry.total_weight() == 100
        config = AgentConfigSnapshot().with_agent("agent_4", enabled=False)
        assert registry.total_weight(config) == 75

    def test_timeout_default_from_settings(self) -> None:
        assert AgentRegistry().timeout_seconds == settings.agent_timeout_seconds

    def test_explicit_zero_timeout_kept(self) -> None:
        assert AgentRegistry(timeout_seconds=0).timeout_seconds == 0


# ── Dispatch Tests ────────────────────────────────────────────────────────


class TestRunAll:
    @pytest.mark.asyncio
    async def test_results_in_factor_order(self, request_: CheckRequest) -> None:
        registry = AgentRegistry(timeout_seconds=1.0)
        # later factors finish first
        for factor in range(1, 6):
            registry.register(StubAgent(f"agent_{factor}", factor, delay=0.05 * (5 - factor)))

        results = await registry.run_all(request_)
        assert registry.initialized
        assert [r.factor for r in results] == [1, 2, 3, 4, 5]

    @pytest.mark.asyncio
    async def test_failure_isolated(self, request_: CheckRequest) -> None:
        registry = AgentRegistry(timeout_seconds=1.0)
        registry.register(StubAgent("ok", 1))
        registry.register(StubAgent("broken", 2, fail=True))
        registry.initialize()

        results = await registry.run_all(request_)
        assert len(results) == 2
        assert results[0].status == AgentStatus.COMPLETE
        assert results[1].status == AgentStatus.ERROR
        assert results[1].raw_score == 0
        assert results[1].confidence == 0
        assert "boom" in results[1].message

    @pytest.mark.asyncio
    async def test_timeout(self, request_: CheckRequest) -> None:
        registry = AgentRegistry(timeout_seconds=0.05)
        slow = StubAgent("slow", 3, delay=1.0)
        registry.register(slow)
        registry.register(StubAgent("fast", 4))

        results = await registry.run_all(request_)
        assert results[0].status == AgentStatus.ERROR
        assert results[0].message == "Timed out after 0.05s"
        assert results[1].status == AgentStatus.COMPLETE
        assert slow.get_stats()["error_count"] == 1

    @pytest.mark.asyncio
    async def test_disabled_agent_skipped(
        self, registry: AgentRegistry, request_: CheckRequest
    ) -> None:
        config = AgentConfigSnapshot().with_agent("agent_2", enabled=False)
        results = await registry.run_all(request_, config)
        assert [r.agent_id for r in results] == ["agent_1", "agent_3", "agent_4", "agent_5"]

    @pytest.mark.asyncio
    async def test_weight_override_applied(
        self, registry: AgentRegistry, request_: CheckRequest
    ) -> None:
        config = AgentConfigSnapshot().with_agent("agent_5", weight=40)
        results = await registry.run_all(request_, config)
        assert results[-1].weight == 40
        assert results[-1].weighted_score == 20

    @pytest.mark.asyncio
    async def test_empty_registry(self, request_: CheckRequest) -> None:
        assert await AgentRegistry().run_all(request_) == []


# ── Cancellation Tests ────────────────────────────────────────────────────


class TestCancellation:
    @pytest.mark.asyncio
    async def test_cancelled_before_dispatch(
        self, registry: AgentRegistry, request_: CheckRequest
    ) -> None:
        event = asyncio.Event()
        event.set()
        with pytest.raises(CheckCancelled):
            await registry.run_all(request_, cancel_event=event)

    @pytest.mark.asyncio
    async def test_cancelled_mid_pass(self, request_: CheckRequest) -> None:
        registry = AgentRegistry(timeout_seconds=5.0)
        registry.register(StubAgent("slow", 1, delay=2.0))
        event = asyncio.Event()

        run = asyncio.create_task(registry.run_all(request_, cancel_event=event))
        await asyncio.sleep(0.05)
        event.set()

        with pytest.raises(CheckCancelled):
            await run

    @pytest.mark.asyncio
    async def test_unset_event_completes(
        self, registry: AgentRegistry, request_: CheckRequest
    ) -> None:
        results = await registry.run_all(request_, cancel_event=asyncio.Event())
        assert len(results) == 5


class TestStatistics:
    @pytest.mark.asyncio
    async def test_statistics(self, registry: AgentRegistry, request_: CheckRequest) -> None:
        await registry.run_all(request_)
        stats = registry.get_statistics()
        assert stats["initialized"] is True
        assert stats["total_agents"] == 5
        assert stats["factors"] == [1, 2, 3, 4, 5]
        assert stats["runs"] == 1
        assert stats["results_by_status"] == {"complete": 5}
        assert stats["agents"]["agent_1"]["processed_count"] == 1
