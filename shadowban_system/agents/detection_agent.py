"""Real-Time Detection agent (factor 4): signal database matches in content.

Every enabled detection type the platform supports is checked against its
signal database. Each type gets a 0-100 score (database risk score plus
type-specific extras) and the raw score is the weighted mean over the types
that actually had something to look at. Content always counts, so plain
text with no tokens is still judged by the content scanner.
"""

from typing import Dict, List, Optional, Tuple

from shadowban_system.agents.base_agent import Assessment, RiskAgent
from shadowban_system.config.flagged_content import DEFAULT_HASHTAG_THRESHOLD
from shadowban_system.config.flagged_emojis import EMOJI_SPAM_THRESHOLD
from shadowban_system.config.flagged_mentions import MASS_MENTION_THRESHOLD
from shadowban_system.config.platforms import TOKEN_KINDS, supports
from shadowban_system.config.scoring import DETECTION_TYPE_WEIGHTS
from shadowban_system.data_management.schemas import (
    AgentConfigSnapshot,
    AgentStatus,
    BulkCheckResult,
    CheckRequest,
    Severity,
    SignalTier,
)
from shadowban_system.databases.catalog import SignalCatalog
from shadowban_system.utils.text import (
    HASHTAG_PATTERN,
    MENTION_PATTERN,
    dedupe,
    extract_emojis,
    extract_urls,
)

CATALOG_CONFIDENCE = 85.0
HEURISTIC_CONFIDENCE = 40.0

# Finding impact per tier; safe tokens produce no finding
TIER_IMPACT = {
    SignalTier.BANNED: (30, Severity.HIGH),
    SignalTier.RESTRICTED: (15, Severity.MEDIUM),
    SignalTier.MONITORED: (5, Severity.LOW),
}
THROTTLED_IMPACT = 20
SHORTENER_IMPACT = 10

THROTTLED_EXTRA = 10
SHORTENER_EXTRA = 10
MASS_MENTION_EXTRA = 15
EMOJI_SPAM_EXTRA = 10

SINGULAR = {
    "hashtags": "hashtag",
    "cashtags": "cashtag",
    "mentions": "mention",
    "links": "link",
    "emojis": "emoji",
    "content": "content",
}


class DetectionAgent(RiskAgent):
    """
    Scores text against the signal catalog.

    Attributes:
        catalog: SignalCatalog; None switches to a regex-only heuristic
    """

    agent_id = "detection"
    name = "Real-Time Detection Agent"
    factor = 4
    description = "Signal database matching over hashtags, links, mentions, emojis and content"

    def __init__(self, catalog: Optional[SignalCatalog] = None, weight: Optional[float] = None):
        super().__init__(weight=weight)
        self.catalog = catalog

    async def evaluate(self, request: CheckRequest, config: AgentConfigSnapshot) -> Assessment:
        text = request.text or ""
        if not request.has_text and not request.urls:
            return Assessment(raw_score=0, confidence=100, message="No text content to analyze")

        if self.catalog is None:
            return self.heuristic(text, request.platform)

        assessment = Assessment(confidence=CATALOG_CONFIDENCE)
        type_scores: Dict[str, float] = {}

        for kind in TOKEN_KINDS:
            if kind not in config.detection_types or not supports(request.platform, kind):
                continue
            scored = self.check_type(kind, request, assessment)
            if scored is not None:
                type_scores[kind] = scored

        assessment.raw_score = weighted_mean(type_scores)
        if not assessment.findings:
            assessment.add(self.build_finding("all_clear", "All signals clean"))
            assessment.message = "All signals clean"
        else:
            assessment.message = (
                f"{len(assessment.findings)} signal(s) across {len(type_scores)} detection type(s)"
            )
        return assessment

    def check_type(self, kind: str, request: CheckRequest, assessment: Assessment) -> Optional[float]:
        """
        Check one detection type and add its findings.

        Returns:
            Type score 0-100, or None when the type had no tokens to check
        """
        text = request.text or ""
        platform = request.platform

        if kind == "content":
            if not request.has_text:
                return None
            scan = self.catalog.content.extract_and_check(text, platform)
            self.add_tier_findings(kind, scan.results, assessment)
            for hit in scan.patterns:
                assessment.add(
                    self.build_finding(hit.code, hit.message, hit.score, **hit.detail),
                    "content_patterns",
                )
            return float(scan.total_score)

        tokens = self.extract(kind, request)
        if not tokens:
            return None
        result, extra = self.bulk_check(kind, tokens, request, assessment)
        return float(min(100, result.summary.risk_score + extra))

    def extract(self, kind: str, request: CheckRequest) -> List[str]:
        """
        Tokens of one detection type.

        The platform adapter's extraction in ``request.content`` is used when
        present; the catalog's own extractors cover requests built without it.
        Attached urls are always added to the links.
        """
        text = request.text or ""
        content = request.content
        catalog = self.catalog

        if kind == "links":
            found = content.urls if content is not None else extract_urls(text)
            return dedupe(list(found) + list(request.urls))
        if content is None:
            extractors = {
                "hashtags": catalog.hashtags.extract_hashtags,
                "cashtags": catalog.hashtags.extract_cashtags,
                "mentions": catalog.mentions.extract_tokens,
                "emojis": catalog.emojis.extract_tokens,
            }
            return extractors[kind](text, request.platform)
        if kind == "emojis":
            return catalog.emojis.expand(content.emojis)
        return dedupe(getattr(content, kind))

    def bulk_check(
        self,
        kind: str,
        tokens: List[str],
        request: CheckRequest,
        assessment: Assessment,
    ) -> Tuple[BulkCheckResult, int]:
        catalog = self.catalog
        platform = request.platform
        extra = 0

        if kind == "hashtags":
            result = catalog.hashtags.check_hashtags(tokens, platform)
        elif kind == "cashtags":
            result = catalog.hashtags.check_cashtags(tokens, platform)
        elif kind == "links":
            result = catalog.links.check_bulk(tokens, platform)
        elif kind == "mentions":
            result = catalog.mentions.check_bulk(tokens, platform)
        else:
            result = catalog.emojis.check_bulk(tokens, platform)

        if kind == "links":
            throttled = catalog.links.throttled(result)
            shorteners = catalog.links.shorteners(result)
            extra += THROTTLED_EXTRA * len(throttled) + SHORTENER_EXTRA * len(shorteners)
            special = set(throttled) | set(shorteners)
            self.add_link_findings(throttled, shorteners, assessment)
            self.add_tier_findings(kind, result, assessment, skip=special)
        else:
            self.add_tier_findings(kind, result, assessment)

        if kind == "mentions" and len(tokens) > MASS_MENTION_THRESHOLD:
            extra += MASS_MENTION_EXTRA
            assessment.add(
                self.build_finding(
                    "mass_mentions",
                    f"{len(tokens)} accounts mentioned in one post",
                    MASS_MENTION_EXTRA,
                    count=len(tokens),
                ),
                "mass_mentions",
            )
        if kind == "emojis":
            if request.content is not None:
                count = len(request.content.emojis)
            else:
                count = len(extract_emojis(request.text or ""))
            if count > EMOJI_SPAM_THRESHOLD:
                extra += EMOJI_SPAM_EXTRA
                assessment.add(
                    self.build_finding(
                        "emoji_spam", f"{count} emojis in one post", EMOJI_SPAM_EXTRA, count=count
                    ),
                    "emoji_spam",
                )
        return result, extra

    def add_tier_findings(
        self,
        kind: str,
        result: BulkCheckResult,
        assessment: Assessment,
        skip=frozenset(),
    ) -> None:
        noun = SINGULAR[kind]
        for match in result.flagged_matches():
            if match.token in skip:
                continue
            impact, severity = TIER_IMPACT[match.tier]
            entry = match.entry
            tier = match.tier.value
            if kind == "mentions":
                code, flag = "flagged_mention", "flagged_mentions"
            else:
                code, flag = f"{tier}_{noun}", f"{tier}_{kind}"
            message = f"{tier.capitalize()} {noun}: {match.token}"
            if entry is not None and entry.notes:
                message += f" ({entry.notes})"
            assessment.add(
                self.build_finding(
                    code,
                    message,
                    impact,
                    severity=severity,
                    token=match.token,
                    tier=tier,
                    category=entry.category if entry else None,
                ),
                flag,
            )

    def add_link_findings(
        self, throttled: List[str], shorteners: List[str], assessment: Assessment
    ) -> None:
        for url in throttled:
            assessment.add(
                self.build_finding(
                    "throttled_domain",
                    f"Throttled domain: {url}",
                    THROTTLED_IMPACT,
                    severity=Severity.MEDIUM,
                    token=url,
                ),
                "throttled_domains",
            )
        for url in shorteners:
            assessment.add(
                self.build_finding("link_shortener", f"Link shortener: {url}", SHORTENER_IMPACT, token=url),
                "link_shorteners",
            )

    def heuristic(self, text: str, platform: str) -> Assessment:
        """Regex-only scoring used when no signal catalog is available."""
        assessment = Assessment(
            status=AgentStatus.DEGRADED,
            confidence=HEURISTIC_CONFIDENCE,
            flags=["catalog_unavailable"],
            message="Signal catalog unavailable, regex heuristics only",
        )
        hashtags = len(HASHTAG_PATTERN.findall(text)) if supports(platform, "hashtags") else 0
        mentions = len(MENTION_PATTERN.findall(text))
        emojis = len(extract_emojis(text))

        checks = (
            ("excessive_hashtags", hashtags > DEFAULT_HASHTAG_THRESHOLD, 10, f"{hashtags} hashtags"),
            ("mass_mentions", mentions > MASS_MENTION_THRESHOLD, MASS_MENTION_EXTRA, f"{mentions} mentions"),
            ("emoji_spam", emojis > EMOJI_SPAM_THRESHOLD, EMOJI_SPAM_EXTRA, f"{emojis} emojis"),
        )
        for code, fired, score, message in checks:
            if fired:
                assessment.raw_score += score
                assessment.add(self.build_finding(code, message, score), code)
        return assessment

    def get_capabilities(self) -> list[str]:
        return super().get_capabilities() + [f"detect_{kind}" for kind in TOKEN_KINDS]


def weighted_mean(type_scores: Dict[str, float]) -> float:
    """Weighted mean of per-type scores using the detection type weights."""
    total_weight = sum(DETECTION_TYPE_WEIGHTS[kind] for kind in type_scores)
    if not total_weight:
        return 0.0
    return sum(DETECTION_TYPE_WEIGHTS[kind] * score for kind, score in type_scores.items()) / total_weight
