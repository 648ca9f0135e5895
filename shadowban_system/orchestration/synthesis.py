"""Synthesis of agent results into one risk assessment.

The functions here are pure: given the same agent results they produce the
same probability, verdict and recommendations. Only usable results feed the
probability; see AgentResult.is_usable.
"""

from statistics import mean
from typing import Dict, Iterable, List, Optional, Sequence

from shadowban_system.config.scoring import (
    AGREEMENT_BUCKETS,
    MAX_PRIMARY_ISSUES,
    RESTRICTED_MIN_CONFIDENCE,
    REVIEW_PROBABILITY_THRESHOLD,
    VERDICT_DESCRIPTIONS,
    VERDICT_RULES,
)
from shadowban_system.data_management.schemas import (
    AgentAgreement,
    AgentResult,
    Finding,
    Recommendation,
    RecommendationPriority,
    Synthesis,
    Verdict,
)
from shadowban_system.databases.link_database import domain_of
from shadowban_system.utils.text import dedupe


def in_factor_order(results: Iterable[AgentResult]) -> List[AgentResult]:
    return sorted(results, key=lambda r: (r.factor, r.agent_id))


def compute_probability(results: Sequence[AgentResult]) -> int:
    """
    Weighted mean of raw scores over usable results.

    Args:
        results: Agent results of one pass

    Returns:
        Probability 0-100; 0 when no result is usable or weights sum to zero
    """
    usable = [r for r in results if r.is_usable]
    total_weight = sum(r.weight for r in usable)
    if total_weight <= 0:
        return 0
    weighted = sum(r.raw_score * r.weight for r in usable) / total_weight
    return max(0, min(100, round(weighted)))


def compute_confidence(results: Sequence[AgentResult]) -> int:
    """Mean of the non-zero agent confidences (0 when there are none)."""
    confidences = [r.confidence for r in results if r.confidence > 0]
    if not confidences:
        return 0
    return max(0, min(100, round(mean(confidences))))


def determine_verdict(probability: float, confidence: float) -> Verdict:
    """
    Map probability and confidence onto a verdict.

    Rules are checked in order; a high probability without enough
    confidence falls back to UNCERTAIN.
    """
    for max_probability, min_confidence, verdict in VERDICT_RULES:
        if probability <= max_probability and confidence >= min_confidence:
            return Verdict(verdict)
    if probability > 70 and confidence >= RESTRICTED_MIN_CONFIDENCE:
        return Verdict.RESTRICTED
    return Verdict.UNCERTAIN


def collect_primary_issues(results: Sequence[AgentResult]) -> List[str]:
    """
    High and critical finding messages across agents.

    Walks agents in factor order and findings in emission order, drops
    repeated messages and keeps the most recent MAX_PRIMARY_ISSUES in the
    order they were emitted.
    """
    messages = [
        finding.message
        for result in in_factor_order(results)
        for finding in result.findings
        if finding.is_high_severity
    ]
    return dedupe(messages)[-MAX_PRIMARY_ISSUES:]


def agent_agreement(results: Sequence[AgentResult]) -> AgentAgreement:
    """Bucket the mean raw score of usable agents."""
    usable = [r.raw_score for r in results if r.is_usable]
    if not usable:
        return AgentAgreement.CLEAR
    average = mean(usable)
    for minimum, bucket in AGREEMENT_BUCKETS:
        if average >= minimum:
            return AgentAgreement(bucket)
    return AgentAgreement.CLEAR


def _findings_by_code(results: Sequence[AgentResult]) -> Dict[str, List[Finding]]:
    grouped: Dict[str, List[Finding]] = {}
    for result in in_factor_order(results):
        for finding in result.findings:
            grouped.setdefault(finding.code, []).append(finding)
    return grouped


def _tokens(findings: List[Finding]) -> List[str]:
    return dedupe([f.metadata["token"] for f in findings if f.metadata.get("token")])


# finding code -> (priority, action prefix, detail); the action lists the tokens
_TOKEN_RULES = (
    ("banned_hashtag", RecommendationPriority.CRITICAL, "Remove banned hashtag(s)",
     "Banned hashtags can hide the whole post from hashtag and search pages."),
    ("banned_cashtag", RecommendationPriority.CRITICAL, "Remove banned cashtag(s)",
     "Flagged cashtags are associated with pump schemes and scam filters."),
    ("banned_content", RecommendationPriority.CRITICAL, "Remove banned term(s)",
     "These terms are filtered outright on this platform."),
    ("banned_link", RecommendationPriority.CRITICAL, "Remove link(s) to banned domains",
     "Links to known spam domains are blocked or heavily down-ranked."),
)


def build_recommendations(
    results: Sequence[AgentResult],
    probability: Optional[int] = None,
) -> List[Recommendation]:
    """
    Derive actionable advice from the findings of one pass.

    The list is never empty: with nothing specific to say it carries a
    generic review recommendation.

    Args:
        results: Agent results of one pass
        probability: Synthesized probability; computed if omitted

    Returns:
        Recommendations, most urgent rule first
    """
    if probability is None:
        probability = compute_probability(results)
    by_code = _findings_by_code(results)
    flags = {flag for r in results for flag in r.flags}
    recommendations: List[Recommendation] = []

    for code, priority, action, detail in _TOKEN_RULES:
        if code in by_code:
            recommendations.append(Recommendation(
                priority=priority,
                action=f"{action}: {', '.join(_tokens(by_code[code]))}",
                detail=detail,
                trigger=code,
            ))

    if "link_shortener" in by_code:
        recommendations.append(Recommendation(
            priority=RecommendationPriority.HIGH,
            action="Replace link shorteners with full URLs",
            detail="Shortened links hide their destination and are treated as spam signals.",
            trigger="link_shortener",
        ))

    if "throttled_domain" in by_code:
        domains = dedupe([domain_of(t) for t in _tokens(by_code["throttled_domain"])])
        recommendations.append(Recommendation(
            priority=RecommendationPriority.MEDIUM,
            action=f"Consider alternatives to throttled domains: {', '.join(domains)}",
            detail="Links to competing platforms load slower and reach fewer people.",
            trigger="throttled_domain",
        ))

    if "flagged_mention" in by_code:
        recommendations.append(Recommendation(
            priority=RecommendationPriority.MEDIUM,
            action=f"Review mentioned accounts: {', '.join(_tokens(by_code['flagged_mention']))}",
            detail="Tagging accounts that look automated links your post to spam networks.",
            trigger="flagged_mention",
        ))

    if "worsening" in flags:
        recommendations.append(Recommendation(
            priority=RecommendationPriority.HIGH,
            action="Risk is rising across recent checks; pause and review recent posts",
            detail="Repeated risky posts compound into account-level restrictions.",
            trigger="worsening_trend",
        ))

    if not recommendations and probability > REVIEW_PROBABILITY_THRESHOLD:
        recommendations.append(Recommendation(
            priority=RecommendationPriority.HIGH,
            action="Review content for potential trigger patterns",
        ))

    if not recommendations:
        recommendations.append(Recommendation(
            priority=RecommendationPriority.INFO,
            action="Review content before posting",
        ))
    return recommendations


def synthesize(
    results: Sequence[AgentResult],
    platform: Optional[str] = None,
    kind: Optional[str] = None,
) -> Synthesis:
    """
    Combine agent results into a Synthesis.

    Args:
        results: Agent results of one pass, in any order
        platform: Platform id of the request
        kind: Check kind of the request

    Returns:
        Synthesis with results re-ordered by factor
    """
    ordered = in_factor_order(results)
    probability = compute_probability(ordered)
    confidence = compute_confidence(ordered)
    verdict = determine_verdict(probability, confidence)

    return Synthesis(
        probability=probability,
        confidence=confidence,
        verdict=verdict,
        verdict_description=VERDICT_DESCRIPTIONS[verdict.value],
        primary_issues=collect_primary_issues(ordered),
        recommendations=build_recommendations(ordered, probability),
        agent_results=ordered,
        agent_agreement=agent_agreement(ordered),
        platform=platform,
        kind=kind,
    )
