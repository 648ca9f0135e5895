"""Platform-Signal agent (factor 1): platform-reported account and post state.

With a PlatformDataSource the agent scores what the platform itself reports.
Without one it falls back to a name heuristic over the account handle, which
is reported as degraded with low confidence.
"""

from datetime import datetime, timedelta
from typing import Callable, Optional

from shadowban_system.agents.base_agent import Assessment, RiskAgent, utc_now
from shadowban_system.agents.collaborators import (
    AccountSnapshot,
    PlatformDataSource,
    PostSnapshot,
)
from shadowban_system.config.scoring import TIER_WEIGHTS
from shadowban_system.data_management.schemas import (
    AgentConfigSnapshot,
    AgentStatus,
    CheckKind,
    CheckRequest,
    Severity,
)
from shadowban_system.databases.mention_database import MentionDatabase
from shadowban_system.errors import DataUnavailable

NEW_ACCOUNT_AGE = timedelta(days=30)
LOW_FOLLOWER_RATIO = 0.1
LOW_RATIO_MIN_FOLLOWING = 100
LOW_ENGAGEMENT_RATE = 0.005
HEURISTIC_CONFIDENCE = 25.0

ACCOUNT_SCORES = {
    "protected": 10,
    "new_account": 10,
    "low_follower_ratio": 10,
    "visibility_restricted": 50,
}

POST_SCORES = {
    "tombstoned": 60,
    "age_restricted": 20,
    "limited_visibility": 30,
    "removed": 60,
    "removed_by_automod": 40,
    "removed_by_spam_filter": 50,
    "low_engagement": 10,
}


class PlatformSignalAgent(RiskAgent):
    """
    Scores account and post state reported by the platform.

    Attributes:
        data_source: Optional PlatformDataSource; None forces the heuristic path
        mentions: Mention database used for the handle heuristic
        clock: Callable returning the current UTC time
    """

    agent_id = "platform_signal"
    name = "Platform-Signal Agent"
    factor = 1
    description = "Platform API analysis of account and post state"

    def __init__(
        self,
        data_source: Optional[PlatformDataSource] = None,
        mentions: Optional[MentionDatabase] = None,
        clock: Callable[[], datetime] = utc_now,
        weight: Optional[float] = None,
    ):
        super().__init__(weight=weight)
        self.data_source = data_source
        self.mentions = mentions
        self.clock = clock

    async def evaluate(self, request: CheckRequest, config: AgentConfigSnapshot) -> Assessment:
        if request.kind == CheckKind.TEXT:
            return self.not_applicable("Platform signals need an account or post")

        try:
            if self.data_source is None:
                raise DataUnavailable("platform_data")
            if request.kind == CheckKind.ACCOUNT:
                snapshot = await self.data_source.fetch_account(request.platform, request.username)
                return self.score_account(snapshot)
            snapshot = await self.data_source.fetch_post(request.platform, request.post_id, request.url)
            return self.score_post(snapshot)
        except DataUnavailable as e:
            self.logger.debug("Platform data unavailable, using handle heuristic", reason=str(e))
            return self.heuristic(request)

    def score_account(self, snapshot: AccountSnapshot) -> Assessment:
        """Score an account snapshot; a missing or suspended account scores 100."""
        assessment = Assessment(confidence=snapshot.coverage() * 100)

        if snapshot.exists is False:
            assessment.raw_score = 100
            assessment.add(
                self.build_finding("account_not_found", "Account does not exist or is hidden", 100),
                "account_missing",
            )
            return assessment
        if snapshot.suspended:
            assessment.raw_score = 100
            assessment.add(
                self.build_finding("account_suspended", "Account is suspended", 100),
                "suspended",
            )
            return assessment

        score = 0.0
        if snapshot.protected:
            score += ACCOUNT_SCORES["protected"]
            assessment.add(
                self.build_finding(
                    "account_protected",
                    "Protected account: content is not publicly visible",
                    ACCOUNT_SCORES["protected"],
                ),
                "protected",
            )
        if snapshot.created_at is not None:
            age = self.clock() - snapshot.created_at
            if age < NEW_ACCOUNT_AGE:
                score += ACCOUNT_SCORES["new_account"]
                assessment.add(
                    self.build_finding(
                        "new_account",
                        f"Account is {age.days} days old",
                        ACCOUNT_SCORES["new_account"],
                        age_days=age.days,
                    ),
                    "new_account",
                )
        following = snapshot.following_count
        if snapshot.followers_count is not None and following:
            ratio = snapshot.followers_count / following
            if ratio < LOW_FOLLOWER_RATIO and following > LOW_RATIO_MIN_FOLLOWING:
                score += ACCOUNT_SCORES["low_follower_ratio"]
                assessment.add(
                    self.build_finding(
                        "low_follower_ratio",
                        f"Follower/following ratio {ratio:.2f} looks automated",
                        ACCOUNT_SCORES["low_follower_ratio"],
                        ratio=round(ratio, 3),
                    ),
                    "low_follower_ratio",
                )
        if snapshot.visibility_restricted:
            score += ACCOUNT_SCORES["visibility_restricted"]
            assessment.add(
                self.build_finding(
                    "visibility_restricted",
                    "Platform reports restricted visibility",
                    ACCOUNT_SCORES["visibility_restricted"],
                    severity=Severity.CRITICAL,
                ),
                "visibility_restricted",
            )

        assessment.raw_score = score
        if not assessment.findings:
            assessment.message = "Account in good standing"
        return assessment

    def score_post(self, snapshot: PostSnapshot) -> Assessment:
        """Score a post snapshot; a missing post scores 100."""
        assessment = Assessment(confidence=snapshot.coverage() * 100)

        if snapshot.exists is False:
            assessment.raw_score = 100
            assessment.add(
                self.build_finding("post_not_found", "Post does not exist or is hidden", 100),
                "post_missing",
            )
            return assessment

        score = 0.0
        checks = (
            ("tombstoned", snapshot.tombstoned, "Post is tombstoned"),
            ("age_restricted", snapshot.age_restricted, "Post is age restricted"),
            ("limited_visibility", snapshot.limited_visibility, "Post has limited visibility"),
        )
        for code, fired, message in checks:
            if fired:
                score += POST_SCORES[code]
                assessment.add(self.build_finding(code, message, POST_SCORES[code]), code)

        if snapshot.removed:
            if snapshot.removed_by == "automod":
                code, message = "removed_by_automod", "Post removed by AutoModerator"
            elif snapshot.removed_by == "spam_filter":
                code, message = "removed_by_spam_filter", "Post removed by the spam filter"
            else:
                code, message = "removed", "Post was removed"
            score += POST_SCORES[code]
            assessment.add(
                self.build_finding(code, message, POST_SCORES[code], removed_by=snapshot.removed_by),
                "removed",
            )

        rate = snapshot.engagement_rate
        if rate is not None and rate < LOW_ENGAGEMENT_RATE:
            score += POST_SCORES["low_engagement"]
            assessment.add(
                self.build_finding(
                    "low_engagement",
                    f"Engagement rate {rate:.2%} is unusually low",
                    POST_SCORES["low_engagement"],
                    engagement_rate=rate,
                ),
                "low_engagement",
            )

        assessment.raw_score = score
        if not assessment.findings:
            assessment.message = "Post fully visible"
        return assessment

    def heuristic(self, request: CheckRequest) -> Assessment:
        """Reduced check over the account handle when no platform data exists."""
        if not request.username or self.mentions is None:
            return Assessment(
                status=AgentStatus.DEGRADED,
                confidence=0.0,
                flags=["no_platform_data"],
                message="Platform data unavailable",
            )

        assessment = Assessment(
            status=AgentStatus.DEGRADED,
            confidence=HEURISTIC_CONFIDENCE,
            flags=["heuristic_only"],
            message="Platform data unavailable, handle heuristic only",
        )
        entry = self.mentions.check_username(request.username, request.platform)
        if entry is not None and entry.tier.value != "safe":
            weight = TIER_WEIGHTS[entry.tier.value]
            assessment.raw_score = weight
            assessment.add(
                self.build_finding(
                    "suspicious_username",
                    f"Handle matches {entry.category} pattern",
                    weight,
                    tier=entry.tier.value,
                    category=entry.category,
                ),
                "suspicious_username",
            )
        return assessment

    def get_capabilities(self) -> list[str]:
        return super().get_capabilities() + ["account_status", "post_status"]
