"""Agent registry: two-phase registration and concurrent dispatch.

Registration before initialize() is buffered in a pending queue and applied
when initialize() drains it, so agents can be declared while the application
context is still being built. The registry is owned by that context; there
is no module-level instance.
"""

import asyncio
import time
from collections import Counter
from typing import Any, Dict, List, Optional, Tuple

from loguru import logger

from shadowban_system.agents.base_agent import RiskAgent
from shadowban_system.config.settings import settings
from shadowban_system.data_management.schemas import (
    AgentConfigSnapshot,
    AgentResult,
    CheckRequest,
)
from shadowban_system.errors import CheckCancelled


class AgentRegistry:
    """
    Catalog of risk agents keyed by agent_id.

    Features:
    - Deferred registration via a pending queue
    - Concurrent dispatch with a per-agent timeout
    - Results in ascending factor order regardless of completion order
    - Cooperative cancellation through an asyncio.Event
    """

    def __init__(self, timeout_seconds: Optional[float] = None):
        """
        Initialize the agent registry.

        Args:
            timeout_seconds: Per-agent analyze() timeout. Defaults to
                settings.agent_timeout_seconds.
        """
        self._agents: Dict[str, RiskAgent] = {}
        self._pending: List[RiskAgent] = []
        self._initialized = False
        self.timeout_seconds = (
            settings.agent_timeout_seconds if timeout_seconds is None else timeout_seconds
        )
        self._run_count = 0
        self._status_counts: Counter = Counter()
        self.logger = logger.bind(component="AgentRegistry")

        self.logger.info("AgentRegistry created", timeout_seconds=self.timeout_seconds)

    @property
    def initialized(self) -> bool:
        return self._initialized

    def register(self, agent: RiskAgent) -> None:
        """
        Register an agent, replacing any agent with the same id.

        Before initialize() the agent is queued rather than rejected.

        Args:
            agent: RiskAgent instance
        """
        if not self._initialized:
            self._pending.append(agent)
            self.logger.debug("Agent registration deferred", agent_id=agent.agent_id)
            return

        if agent.agent_id in self._agents:
            self.logger.warning("Replacing registered agent", agent_id=agent.agent_id)
        self._agents[agent.agent_id] = agent
        self.logger.info(
            f"Agent registered: {agent.name}",
            agent_id=agent.agent_id,
            factor=agent.factor,
            weight=agent.weight,
        )

    def initialize(self) -> None:
        """Drain the pending queue. Calling it again is a no-op."""
        if self._initialized:
            return
        self._initialized = True
        pending, self._pending = self._pending, []
        for agent in pending:
            self.register(agent)
        self.logger.info("AgentRegistry initialized", agents=len(self._agents))

    def get_all(self) -> Tuple[RiskAgent, ...]:
        """Read-only snapshot of registered agents in factor order."""
        return tuple(sorted(self._agents.values(), key=lambda a: (a.factor, a.agent_id)))

    def get(self, agent_id: str) -> Optional[RiskAgent]:
        return self._agents.get(agent_id)

    def get_by_factor(self, factor: int) -> List[RiskAgent]:
        return [a for a in self.get_all() if a.factor == factor]

    def has_all_factors(self) -> bool:
        """Whether every factor 1-5 has at least one registered agent."""
        return {a.factor for a in self._agents.values()} >= {1, 2, 3, 4, 5}

    def active_agents(self, config: Optional[AgentConfigSnapshot] = None) -> Tuple[RiskAgent, ...]:
        config = config or AgentConfigSnapshot()
        return tuple(a for a in self.get_all() if config.is_enabled(a.agent_id))

    def total_weight(self, config: Optional[AgentConfigSnapshot] = None) -> float:
        """Sum of effective weights of the enabled agents."""
        config = config or AgentConfigSnapshot()
        return sum(a.effective_weight(config) for a in self.active_agents(config))

    async def run_all(
        self,
        request: CheckRequest,
        config: Optional[AgentConfigSnapshot] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> List[AgentResult]:
        """
        Run every enabled agent concurrently on one request.

        A timed-out or crashing agent yields an error result and the rest of
        the batch continues.

        Args:
            request: Immutable check request
            config: Configuration snapshot; defaults apply if None
            cancel_event: Optional event; setting it abandons the pass

        Returns:
            One AgentResult per enabled agent, in ascending factor order

        Raises:
            CheckCancelled: If cancel_event was set before all agents finished
        """
        if not self._initialized:
            self.initialize()
        config = config or AgentConfigSnapshot()
        agents = self.active_agents(config)
        self._run_count += 1

        if cancel_event is not None and cancel_event.is_set():
            raise CheckCancelled("check cancelled before dispatch")

        tasks = [
            asyncio.create_task(self._run_one(agent, request, config), name=agent.agent_id)
            for agent in agents
        ]
        if not tasks:
            return []

        gathered = asyncio.gather(*tasks)
        if cancel_event is None:
            results = await gathered
        else:
            results = await self._race_cancel(gathered, tasks, cancel_event)

        self._status_counts.update(r.status.value for r in results)
        return list(results)

    async def _race_cancel(
        self,
        gathered: "asyncio.Future[List[AgentResult]]",
        tasks: List["asyncio.Task[AgentResult]"],
        cancel_event: asyncio.Event,
    ) -> List[AgentResult]:
        waiter = asyncio.create_task(cancel_event.wait())
        try:
            await asyncio.wait({gathered, waiter}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            waiter.cancel()

        if gathered.done():
            return gathered.result()

        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        # mark the gather outcome retrieved so asyncio does not log it
        if gathered.done() and not gathered.cancelled():
            gathered.exception()
        self.logger.info("Check cancelled", agents=len(tasks))
        raise CheckCancelled("check cancelled while agents were running")

    async def _run_one(
        self,
        agent: RiskAgent,
        request: CheckRequest,
        config: AgentConfigSnapshot,
    ) -> AgentResult:
        started = time.perf_counter()
        try:
            return await asyncio.wait_for(agent.analyze(request, config), self.timeout_seconds)
        except asyncio.TimeoutError:
            agent.error_count += 1
            self.logger.warning(
                "Agent timed out",
                agent_id=agent.agent_id,
                timeout_seconds=self.timeout_seconds,
            )
            return agent.error_result(
                f"Timed out after {self.timeout_seconds:g}s",
                weight=agent.effective_weight(config),
                duration_ms=(time.perf_counter() - started) * 1000,
            )
        except Exception as e:
            # analyze() already converts failures; this covers agents overriding it
            agent.error_count += 1
            self.logger.bind(agent_id=agent.agent_id, error=str(e)).exception(
                "Agent raised out of analyze()"
            )
            return agent.error_result(
                f"Analysis failed: {e}",
                weight=agent.effective_weight(config),
                duration_ms=(time.perf_counter() - started) * 1000,
            )

    def get_statistics(self) -> Dict[str, Any]:
        """
        Get registry statistics for monitoring.

        Returns:
            Dictionary with registry stats
        """
        agents = self.get_all()
        return {
            "initialized": self._initialized,
            "total_agents": len(agents),
            "pending_agents": len(self._pending),
            "factors": sorted({a.factor for a in agents}),
            "total_weight": self.total_weight(),
            "runs": self._run_count,
            "results_by_status": dict(self._status_counts),
            "agents": {a.agent_id: a.get_stats() for a in agents},
        }
