"""Signal database schemas.

A SignalEntry is one classified token or pattern. Entries are frozen: the
databases that hold them are loaded once and never mutated at request time.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class SignalTier(str, Enum):
    """Status tier of a classified token, from most to least severe."""

    BANNED = "banned"
    RESTRICTED = "restricted"
    MONITORED = "monitored"
    SAFE = "safe"


class SignalEntry(BaseModel):
    """One classified token or pattern in a signal database."""

    token: str = Field(..., min_length=1, description="Normalized token or pattern")
    tier: SignalTier
    platforms: tuple[str, ...] = Field(
        default=("all",), description="Platform ids, or 'all' for every platform"
    )
    category: str = Field("uncategorized", description="Grouping used for stats and advice")
    notes: Optional[str] = None
    kind: str = Field("exact", description="exact, prefix, pattern or combination")

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "examples": [
                {
                    "token": "#followback",
                    "tier": "banned",
                    "platforms": ["twitter", "instagram"],
                    "category": "engagement",
                    "notes": "Follow-trading signal",
                    "kind": "exact",
                }
            ]
        },
    }

    def applies_to(self, platform: str) -> bool:
        """Check whether this entry is in force on ``platform``."""
        return "all" in self.platforms or platform in self.platforms


class TokenMatch(BaseModel):
    """A token together with the entry that classified it."""

    token: str
    tier: SignalTier
    entry: Optional[SignalEntry] = Field(
        None, description="Matching entry; None for unmatched tokens"
    )

    model_config = {"frozen": True}


class BulkCheckSummary(BaseModel):
    """Counts per tier and the aggregate risk score of a bulk check."""

    total: int = Field(0, ge=0)
    banned_count: int = Field(0, ge=0)
    restricted_count: int = Field(0, ge=0)
    monitored_count: int = Field(0, ge=0)
    safe_count: int = Field(0, ge=0)
    risk_score: int = Field(0, ge=0, le=100, description="Weighted tier sum capped at 100")


class BulkCheckResult(BaseModel):
    """Partition of tokens into tiers.

    Token lists keep the caller's spelling and first-seen order; membership
    does not depend on input order.
    """

    platform: str
    banned: list[str] = Field(default_factory=list)
    restricted: list[str] = Field(default_factory=list)
    monitored: list[str] = Field(default_factory=list)
    safe: list[str] = Field(default_factory=list)
    matches: list[TokenMatch] = Field(default_factory=list)
    summary: BulkCheckSummary = Field(default_factory=BulkCheckSummary)

    def tokens_in(self, tier: SignalTier) -> list[str]:
        """Return the tokens classified into ``tier``."""
        return getattr(self, tier.value)

    def flagged_matches(self) -> list[TokenMatch]:
        """Matches in any tier other than safe."""
        return [m for m in self.matches if m.tier != SignalTier.SAFE]


class PatternHit(BaseModel):
    """A heuristic pattern check that fired on free text."""

    code: str
    message: str
    score: int = Field(..., ge=0)
    detail: dict = Field(default_factory=dict)


class ExtractAndCheckResult(BaseModel):
    """Tokens extracted from text plus their bulk classification."""

    platform: str
    tokens: list[str] = Field(default_factory=list)
    results: BulkCheckResult
    patterns: list[PatternHit] = Field(
        default_factory=list, description="Heuristic hits; only the content scanner fills this"
    )

    @property
    def pattern_score(self) -> int:
        return sum(hit.score for hit in self.patterns)

    @property
    def total_score(self) -> int:
        """Risk score of the matched tokens plus heuristic hits, capped at 100."""
        return min(100, self.results.summary.risk_score + self.pattern_score)


class DatabaseStats(BaseModel):
    """Entry counts of one signal database."""

    name: str
    total: int = 0
    by_tier: dict[str, int] = Field(default_factory=dict)
    by_category: dict[str, int] = Field(default_factory=dict)
    by_platform: dict[str, int] = Field(default_factory=dict)
