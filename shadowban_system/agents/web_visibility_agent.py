"""Web-Visibility agent (factor 2): search and listing visibility probes."""

from typing import Optional

from shadowban_system.agents.base_agent import Assessment, RiskAgent
from shadowban_system.agents.collaborators import VisibilityProbe, VisibilityReport
from shadowban_system.data_management.schemas import (
    AgentConfigSnapshot,
    AgentStatus,
    CheckKind,
    CheckRequest,
)
from shadowban_system.errors import DataUnavailable

# check -> (score, message)
VISIBILITY_CHECKS = {
    "search_ban": (40, "Hidden from search results"),
    "search_suggestion_ban": (20, "Missing from search suggestions"),
    "reply_deboosting": (25, "Replies are hidden behind 'show more'"),
    "hidden_in_listing": (50, "Missing from subreddit listing"),
    "hidden_on_old_reddit": (15, "Missing on old Reddit"),
    "not_indexed": (10, "Not indexed by web search"),
    "mobile_hidden": (10, "Hidden on mobile clients"),
}


class WebVisibilityAgent(RiskAgent):
    """
    Scores visibility probe results for an account or post.

    Each positive probe adds its fixed score; confidence is the share of
    applicable probes that returned an answer.
    """

    agent_id = "web_visibility"
    name = "Web-Visibility Agent"
    factor = 2
    description = "Search engine and listing visibility analysis"

    def __init__(self, probe: Optional[VisibilityProbe] = None, weight: Optional[float] = None):
        super().__init__(weight=weight)
        self.probe = probe

    async def evaluate(self, request: CheckRequest, config: AgentConfigSnapshot) -> Assessment:
        if request.kind == CheckKind.TEXT:
            return self.not_applicable("Visibility probes need an account or post")

        try:
            if self.probe is None:
                raise DataUnavailable("visibility_probe")
            report = await self.probe.probe(
                request.platform,
                username=request.username,
                post_id=request.post_id,
            )
        except DataUnavailable as e:
            self.logger.debug("Visibility probe unavailable", reason=str(e))
            return Assessment(
                status=AgentStatus.DEGRADED,
                confidence=0.0,
                flags=["no_probe_data"],
                message="Visibility probe unavailable",
            )
        return self.score_report(report, request.platform)

    def score_report(self, report: VisibilityReport, platform: str) -> Assessment:
        assessment = Assessment(confidence=report.coverage(platform) * 100)
        for check in report.applicable_checks(platform):
            if getattr(report, check):
                score, message = VISIBILITY_CHECKS[check]
                assessment.raw_score += score
                assessment.add(self.build_finding(check, message, score), check)

        if not assessment.findings:
            assessment.message = "Visible in every probe that answered"
        return assessment

    def get_capabilities(self) -> list[str]:
        return super().get_capabilities() + ["search_visibility", "listing_visibility"]
