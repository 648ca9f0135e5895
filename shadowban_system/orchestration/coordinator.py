"""Coordinator that builds requests, runs the agent registry and synthesizes.

The ApplicationContext owns every long-lived object (catalog, history store,
registry, config snapshot). build_default_context() declares the five agents
before the registry is initialized, which exercises deferred registration.
"""

import asyncio
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, Optional, Sequence

from pydantic import ValidationError as PydanticValidationError

from shadowban_system.agents import (
    AgentRegistry,
    DetectionAgent,
    HistoricalAgent,
    PlatformDataSource,
    PlatformSignalAgent,
    PredictiveAgent,
    VisibilityProbe,
    WebVisibilityAgent,
)
from shadowban_system.agents.base_agent import utc_now
from shadowban_system.config.logging import get_logger
from shadowban_system.config.scoring import TAG_VERDICTS, TOTAL_FACTOR_WEIGHT
from shadowban_system.config.settings import settings
from shadowban_system.data_management.history_store import HistoryStore
from shadowban_system.data_management.schemas import (
    AgentConfigSnapshot,
    CheckKind,
    CheckRequest,
    Synthesis,
    TagCheck,
    TagCheckResult,
    TagVerdict,
)
from shadowban_system.databases.catalog import SignalCatalog, load_default_catalog
from shadowban_system.errors import ValidationError
from shadowban_system.orchestration.synthesis import synthesize
from shadowban_system.platforms import UrlType, detect_platform, get_adapter, normalize_platform


@dataclass
class ApplicationContext:
    """Long-lived collaborators shared by every check."""

    catalog: SignalCatalog
    history: HistoryStore
    registry: AgentRegistry
    config: AgentConfigSnapshot = field(default_factory=AgentConfigSnapshot)

    def reconfigure(self, config: AgentConfigSnapshot) -> None:
        """Swap in a new snapshot; checks already running keep the old one."""
        self.config = config


def build_default_context(
    data_source: Optional[PlatformDataSource] = None,
    probe: Optional[VisibilityProbe] = None,
    catalog: Optional[SignalCatalog] = None,
    history: Optional[HistoryStore] = None,
    clock: Callable[[], datetime] = utc_now,
    timeout_seconds: Optional[float] = None,
) -> ApplicationContext:
    """
    Build a context with the five default agents registered.

    Args:
        data_source: Optional platform data source for factor 1
        probe: Optional visibility probe for factor 2
        catalog: Signal catalog; the process-wide default if None
        history: History store; a new one sized from settings if None
        clock: Clock shared by time-dependent agents
        timeout_seconds: Per-agent timeout; settings value if None

    Returns:
        ApplicationContext with an initialized registry
    """
    catalog = catalog or load_default_catalog()
    if history is None:
        history = HistoryStore(persistence_path=settings.history_persistence_path)
    registry = AgentRegistry(timeout_seconds=timeout_seconds)

    registry.register(PlatformSignalAgent(data_source=data_source, mentions=catalog.mentions, clock=clock))
    registry.register(WebVisibilityAgent(probe=probe))
    registry.register(HistoricalAgent(store=history))
    registry.register(DetectionAgent(catalog=catalog))
    registry.register(PredictiveAgent(clock=clock))
    registry.initialize()

    return ApplicationContext(catalog=catalog, history=history, registry=registry)


class RiskCoordinator:
    """
    High-level entry point for shadow-ban risk checks.

    Validates input, builds an immutable CheckRequest, dispatches it to every
    enabled agent, synthesizes the results and records the outcome in the
    history store.
    """

    def __init__(self, context: Optional[ApplicationContext] = None):
        """
        Initialize the coordinator.

        Args:
            context: Application context; build_default_context() if None
        """
        self.context = context or build_default_context()
        self.logger = get_logger("RiskCoordinator")
        self.logger.info(
            "RiskCoordinator initialized",
            agents=len(self.context.registry.get_all()),
        )

    @property
    def registry(self) -> AgentRegistry:
        return self.context.registry

    def build_request(self, **fields: Any) -> CheckRequest:
        """
        Build a CheckRequest, converting schema errors to ValidationError.

        Raises:
            ValidationError: If the fields do not form a valid request
        """
        try:
            return CheckRequest(**fields)
        except PydanticValidationError as e:
            errors = e.errors()
            first = errors[0] if errors else {}
            location = ".".join(str(part) for part in first.get("loc", ())) or None
            raise ValidationError(first.get("msg", str(e)), field=location) from e

    def resolve_platform(self, platform: Optional[str]) -> str:
        """Normalize a platform id, raising ValidationError when unsupported."""
        platform = normalize_platform(platform or settings.default_platform)
        get_adapter(platform)
        return platform

    async def check_text(
        self,
        text: str,
        platform: Optional[str] = None,
        urls: Sequence[str] = (),
        config: Optional[AgentConfigSnapshot] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> Synthesis:
        """
        Check draft or published text for shadow-ban risk.

        Args:
            text: Post text
            platform: Platform id or alias; settings.default_platform if None
            urls: Links attached to the post outside its text
            config: Configuration snapshot; the context's current one if None
            cancel_event: Optional event that abandons the check when set

        Returns:
            Synthesis for the text

        Raises:
            ValidationError: If text is empty or the platform is unsupported
            CheckCancelled: If cancel_event fires before synthesis
        """
        if not text or not text.strip():
            raise ValidationError("Text to check is empty", field="text")
        platform = self.resolve_platform(platform)
        adapter = get_adapter(platform)

        request = self.build_request(
            kind=CheckKind.TEXT,
            platform=platform,
            text=text,
            urls=tuple(urls),
            content=adapter.extract_content(text),
        )
        return await self.run(request, config=config, cancel_event=cancel_event)

    async def check_url(
        self,
        url: str,
        text: Optional[str] = None,
        config: Optional[AgentConfigSnapshot] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> Synthesis:
        """
        Check a post or profile URL.

        Args:
            url: Post or profile URL on a supported platform
            text: Optional post text, when the caller already has it

        Raises:
            ValidationError: If the URL is malformed, on an unknown platform,
                or points at something other than a post or profile
        """
        if not url or not url.strip():
            raise ValidationError("URL is empty", field="url")
        platform = detect_platform(url)
        if platform is None:
            raise ValidationError(f"Unrecognized platform for URL: {url}", field="url")

        adapter = get_adapter(platform)
        info = adapter.get_url_type(url)
        if not info.valid:
            raise ValidationError(info.error or f"Invalid {platform} URL", field="url")

        ids = info.identifiers
        canonical = adapter.get_canonical_url(url)
        if info.type in (UrlType.POST, UrlType.COMMENT):
            fields: Dict[str, Any] = dict(
                kind=CheckKind.POST,
                post_id=ids.get("post_id"),
                username=ids.get("username"),
                subreddit=ids.get("subreddit"),
                url=canonical,
            )
        elif info.type == UrlType.PROFILE:
            fields = dict(
                kind=CheckKind.ACCOUNT,
                username=ids.get("username") or ids.get("channel_id"),
                url=canonical,
            )
        else:
            raise ValidationError(
                f"URL is a {info.type.value} page, not a post or profile", field="url"
            )

        if text:
            fields["text"] = text
            fields["content"] = adapter.extract_content(text)
        request = self.build_request(platform=platform, **fields)
        return await self.run(request, config=config, cancel_event=cancel_event)

    async def check_account(
        self,
        username: str,
        platform: Optional[str] = None,
        config: Optional[AgentConfigSnapshot] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> Synthesis:
        """Check an account by handle (with or without its sigil)."""
        if not username or not username.strip():
            raise ValidationError("Username is empty", field="username")
        platform = self.resolve_platform(platform)
        request = self.build_request(kind=CheckKind.ACCOUNT, platform=platform, username=username)
        return await self.run(request, config=config, cancel_event=cancel_event)

    def check_tags(self, tags: Iterable[str], platform: Optional[str] = None) -> TagCheckResult:
        """
        Quick verdict for hashtags and cashtags without running the agents.

        Args:
            tags: Tags with or without ``#``; ``$`` marks a cashtag
            platform: Platform id or alias

        Returns:
            TagCheckResult with one TagCheck per distinct tag

        Raises:
            ValidationError: If no tag is given or the platform is unsupported
        """
        tags = [t.strip() for t in tags if t and t.strip()]
        if not tags:
            raise ValidationError("No tags to check", field="tags")
        platform = self.resolve_platform(platform)

        result = self.context.catalog.hashtags.check_hashtags(tags, platform)
        checks = []
        for match in result.matches:
            entry = match.entry
            checks.append(TagCheck(
                tag=match.token,
                tier=match.tier,
                verdict=TagVerdict(TAG_VERDICTS[match.tier.value]),
                category=entry.category if entry else None,
                notes=entry.notes if entry else None,
            ))
        return TagCheckResult(platform=platform, tags=checks, risk_score=result.summary.risk_score)

    async def run(
        self,
        request: CheckRequest,
        config: Optional[AgentConfigSnapshot] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> Synthesis:
        """
        Run every enabled agent on a request and synthesize the results.

        The outcome is recorded in history after synthesis, so the historical
        agent of this pass only sees earlier checks.
        """
        config = config or self.context.config
        total_weight = self.registry.total_weight(config)
        if abs(total_weight - TOTAL_FACTOR_WEIGHT) > 1e-6:
            self.logger.warning(
                "Active agent weights do not sum to 100",
                total_weight=total_weight,
            )

        results = await self.registry.run_all(request, config=config, cancel_event=cancel_event)
        synthesis = synthesize(results, platform=request.platform, kind=request.kind.value)

        historical = self.registry.get(HistoricalAgent.agent_id)
        if isinstance(historical, HistoricalAgent) and config.is_enabled(historical.agent_id):
            await historical.record(request, synthesis)

        self.logger.info(
            "Check complete",
            kind=request.kind.value,
            platform=request.platform,
            probability=synthesis.probability,
            confidence=synthesis.confidence,
            verdict=synthesis.verdict.value,
        )
        return synthesis

    def get_status(self) -> Dict[str, Any]:
        """Registry, history and catalog statistics for monitoring."""
        return {
            "registry": self.registry.get_statistics(),
            "history": self.context.history.get_stats(),
            "databases": {
                name: stats.model_dump() for name, stats in self.context.catalog.get_stats().items()
            },
        }
