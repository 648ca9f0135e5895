"""Historical agent (factor 3): trend over past checks of the same entity.

Entities are fingerprinted as ``kind:platform:identifier``; free text has no
identifier and is keyed by a stable hash of its normalized form instead.
The agent only reads history during a pass. The coordinator calls record()
with the final synthesis once every agent has finished.
"""

from collections import Counter
from statistics import mean
from typing import Optional, Sequence

from shadowban_system.agents.base_agent import Assessment, RiskAgent
from shadowban_system.data_management.history_store import HistoryStore
from shadowban_system.data_management.schemas import (
    AgentConfigSnapshot,
    CheckKind,
    CheckRequest,
    HistoryAnalysis,
    HistoryRecord,
    Synthesis,
    TrendDirection,
)
from shadowban_system.utils.text import stable_text_hash

RECENT_WINDOW = 3
TREND_DELTA = 10
HIGH_SCORE_THRESHOLD = 60
RECURRING_MIN_OCCURRENCES = 2

WORSENING_SCORE = 20
RECURRING_SCORE = 15
PAST_ISSUES_SCORE = 10
HIGH_MEAN_SCORE = 15
ELEVATED_MEAN_SCORE = 5

NO_HISTORY_CONFIDENCE = 30
BASE_CONFIDENCE = 40
PER_RECORD_CONFIDENCE = 5
MAX_CONFIDENCE = 90

# Status markers that describe the check rather than a problem with the entity
NEUTRAL_FLAGS = frozenset({
    "no_history",
    "not_applicable",
    "heuristic_only",
    "no_platform_data",
    "no_probe_data",
    "improving",
    "catalog_unavailable",
})


def fingerprint(request: CheckRequest) -> str:
    """Build the history key for a request's entity."""
    identifier = request.identifier
    if identifier is None:
        identifier = stable_text_hash(request.text or "")
    elif request.kind == CheckKind.ACCOUNT:
        identifier = identifier.lower()
    return f"{request.kind.value}:{request.platform}:{identifier}"


def analyze_history(history: Sequence[HistoryRecord]) -> HistoryAnalysis:
    """
    Summarize an entity's history, oldest record first.

    The trend compares the mean of the last three records with the mean of
    everything before them: worsening if recent exceeds older by more than
    10 points, improving if it is lower by more than 10, else stable.

    Args:
        history: Records in insertion order

    Returns:
        HistoryAnalysis (all zero for an empty history)
    """
    if not history:
        return HistoryAnalysis()

    scores = [record.score for record in history]
    recent = scores[-RECENT_WINDOW:]
    older = scores[:-RECENT_WINDOW]
    recent_mean = mean(recent)
    older_mean = mean(older) if older else None

    trend = TrendDirection.STABLE
    if older_mean is not None:
        if recent_mean - older_mean > TREND_DELTA:
            trend = TrendDirection.WORSENING
        elif older_mean - recent_mean > TREND_DELTA:
            trend = TrendDirection.IMPROVING

    flag_counts = Counter(flag for record in history for flag in set(record.flags))
    recurring = [flag for flag, n in flag_counts.items() if n >= RECURRING_MIN_OCCURRENCES]

    return HistoryAnalysis(
        count=len(history),
        mean_score=round(mean(scores), 2),
        recent_mean=round(recent_mean, 2),
        older_mean=round(older_mean, 2) if older_mean is not None else None,
        trend=trend,
        recurring_flags=recurring,
        high_severity_count=sum(1 for s in scores if s >= HIGH_SCORE_THRESHOLD),
    )


class HistoricalAgent(RiskAgent):
    """
    Scores an entity by the trend of its previous check outcomes.

    Attributes:
        store: HistoryStore shared with the coordinator
    """

    agent_id = "historical"
    name = "Historical Agent"
    factor = 3
    description = "Trend analysis over previous checks of the same entity"

    def __init__(self, store: Optional[HistoryStore] = None, weight: Optional[float] = None):
        super().__init__(weight=weight)
        self.store = store if store is not None else HistoryStore()

    async def evaluate(self, request: CheckRequest, config: AgentConfigSnapshot) -> Assessment:
        key = fingerprint(request)
        history = await self.store.get(key)

        if not history:
            assessment = Assessment(
                confidence=NO_HISTORY_CONFIDENCE,
                message="No prior data, first-time analysis",
            )
            assessment.add(
                self.build_finding("no_history", "No previous checks found", fingerprint=key),
                "no_history",
            )
            return assessment

        analysis = analyze_history(history)
        assessment = Assessment(
            confidence=min(MAX_CONFIDENCE, BASE_CONFIDENCE + PER_RECORD_CONFIDENCE * analysis.count)
        )

        if analysis.trend == TrendDirection.WORSENING:
            assessment.raw_score += WORSENING_SCORE
            assessment.add(
                self.build_finding(
                    "worsening_trend",
                    f"Risk trending up: recent mean {analysis.recent_mean:.0f} "
                    f"vs {analysis.older_mean:.0f} before",
                    WORSENING_SCORE,
                    recent_mean=analysis.recent_mean,
                    older_mean=analysis.older_mean,
                ),
                "worsening",
            )
        elif analysis.trend == TrendDirection.IMPROVING:
            assessment.add(
                self.build_finding("improving_trend", "Risk trending down over recent checks"),
                "improving",
            )

        if analysis.recurring_flags:
            assessment.raw_score += RECURRING_SCORE
            assessment.add(
                self.build_finding(
                    "recurring_issues",
                    f"Recurring issues: {', '.join(analysis.recurring_flags)}",
                    RECURRING_SCORE,
                    flags=analysis.recurring_flags,
                ),
                "recurring_issues",
            )

        if analysis.high_severity_count:
            assessment.raw_score += PAST_ISSUES_SCORE
            assessment.add(
                self.build_finding(
                    "past_issues",
                    f"{analysis.high_severity_count} previous check(s) scored "
                    f"{HIGH_SCORE_THRESHOLD} or higher",
                    PAST_ISSUES_SCORE,
                    count=analysis.high_severity_count,
                ),
                "past_issues",
            )

        if analysis.mean_score > 50:
            assessment.raw_score += HIGH_MEAN_SCORE
        elif analysis.mean_score > 30:
            assessment.raw_score += ELEVATED_MEAN_SCORE

        assessment.message = (
            f"{analysis.count} previous check(s), mean score {analysis.mean_score:.0f}, "
            f"trend {analysis.trend.value}"
        )
        return assessment

    async def add_to_history(self, record: HistoryRecord) -> int:
        return await self.store.add(record)

    async def record(self, request: CheckRequest, synthesis: Synthesis) -> HistoryRecord:
        """Store the final outcome of a check under the request's fingerprint."""
        entry = HistoryRecord(
            key=fingerprint(request),
            score=synthesis.probability,
            confidence=synthesis.confidence,
            flags=[f for f in synthesis.flags if f not in NEUTRAL_FLAGS],
            verdict=synthesis.verdict.value,
        )
        await self.add_to_history(entry)
        return entry

    def get_capabilities(self) -> list[str]:
        return super().get_capabilities() + ["trend_analysis", "history"]
