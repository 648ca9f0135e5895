"""Base class for immutable signal databases.

A signal database classifies tokens (hashtags, domains, terms, handles,
emojis) into tiers for a given platform. Subclasses supply the table, the
token normalization rule and the platform-specific extraction rule; the bulk
classification and scoring logic lives here so every database scores the
same way.
"""

from collections import Counter
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from loguru import logger

from shadowban_system.config.scoring import MAX_RISK_SCORE, TIER_SEVERITY, TIER_WEIGHTS
from shadowban_system.data_management.schemas import (
    BulkCheckResult,
    BulkCheckSummary,
    DatabaseStats,
    ExtractAndCheckResult,
    SignalEntry,
    SignalTier,
    TokenMatch,
)

# Entry kinds looked up by exact normalized key; the rest are scanned
INDEXED_KINDS = frozenset({"exact", "combination"})


def rows_to_entries(rows: Iterable[Tuple], kind: str = "exact") -> List[SignalEntry]:
    """Convert (token, tier, platforms, category, notes) rows to entries."""
    return [
        SignalEntry(
            token=token,
            tier=SignalTier(tier),
            platforms=tuple(platforms),
            category=category,
            notes=notes,
            kind=kind,
        )
        for token, tier, platforms, category, notes in rows
    ]


class SignalDatabase:
    """
    Read-only catalog of classified tokens with bulk classification.

    Unmatched tokens are classified as safe. When several entries apply to
    the same token on the same platform, the most severe tier wins.

    Attributes:
        name: Database name used in stats and logs
        token_kind: Platform capability key gating extraction
    """

    name = "signals"
    token_kind: Optional[str] = None

    def __init__(self, entries: Iterable[SignalEntry]):
        self._entries: Tuple[SignalEntry, ...] = tuple(entries)
        index: Dict[str, List[SignalEntry]] = {}
        for entry in self._entries:
            if entry.kind in INDEXED_KINDS:
                index.setdefault(self.normalize(entry.token), []).append(entry)
        self._index: Dict[str, Tuple[SignalEntry, ...]] = {
            key: tuple(found) for key, found in index.items()
        }
        self._scanned: Tuple[SignalEntry, ...] = tuple(
            e for e in self._entries if e.kind not in INDEXED_KINDS
        )
        self.logger = logger.bind(component=type(self).__name__)
        self.logger.debug(f"{self.name} database loaded with {len(self._entries)} entries")

    @property
    def entries(self) -> Tuple[SignalEntry, ...]:
        return self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def normalize(self, token: str) -> str:
        """Canonical lookup key for a token."""
        return token.strip().lower()

    def candidates(self, key: str) -> Sequence[SignalEntry]:
        """Entries that may match ``key`` on any platform."""
        return self._index.get(key, ())

    def lookup(self, token: str, platform: str) -> Optional[SignalEntry]:
        """
        Classify a single token.

        Args:
            token: Raw token as written by the user
            platform: Platform id

        Returns:
            The most severe applicable entry, or None if nothing matches.
        """
        key = self.normalize(token)
        if not key:
            return None
        applicable = [e for e in self.candidates(key) if e.applies_to(platform)]
        if not applicable:
            return None
        return max(applicable, key=lambda e: TIER_SEVERITY[e.tier.value])

    def check_bulk(self, tokens: Iterable[str], platform: str) -> BulkCheckResult:
        """
        Partition tokens into banned, restricted, monitored and safe.

        Tokens that normalize to the same key are classified once. The
        result does not depend on input order beyond the order of the
        returned lists.

        Args:
            tokens: Tokens to classify
            platform: Platform id whose rules apply

        Returns:
            BulkCheckResult with per-tier token lists and a summary risk score
        """
        buckets: Dict[SignalTier, List[str]] = {tier: [] for tier in SignalTier}
        matches: List[TokenMatch] = []
        seen = set()

        for raw in tokens:
            token = raw.strip() if raw else ""
            key = self.normalize(token) if token else ""
            if not key or key in seen:
                continue
            seen.add(key)

            entry = self.lookup(token, platform)
            tier = entry.tier if entry else SignalTier.SAFE
            buckets[tier].append(token)
            matches.append(TokenMatch(token=token, tier=tier, entry=entry))

        counts = Counter(m.tier for m in matches)
        risk_score = min(
            MAX_RISK_SCORE, sum(TIER_WEIGHTS[m.tier.value] for m in matches)
        )

        return BulkCheckResult(
            platform=platform,
            banned=buckets[SignalTier.BANNED],
            restricted=buckets[SignalTier.RESTRICTED],
            monitored=buckets[SignalTier.MONITORED],
            safe=buckets[SignalTier.SAFE],
            matches=matches,
            summary=BulkCheckSummary(
                total=len(matches),
                banned_count=counts[SignalTier.BANNED],
                restricted_count=counts[SignalTier.RESTRICTED],
                monitored_count=counts[SignalTier.MONITORED],
                safe_count=counts[SignalTier.SAFE],
                risk_score=risk_score,
            ),
        )

    def extract_tokens(self, text: str, platform: str) -> List[str]:
        """Pull candidate tokens out of free text. Subclasses implement the lexical rule."""
        return []

    def extract_and_check(self, text: str, platform: str) -> ExtractAndCheckResult:
        """
        Extract tokens from text with the platform's lexical rules and classify them.

        Args:
            text: Free text
            platform: Platform id

        Returns:
            ExtractAndCheckResult with the extracted tokens and their classification
        """
        tokens = self.extract_tokens(text or "", platform)
        return ExtractAndCheckResult(
            platform=platform,
            tokens=tokens,
            results=self.check_bulk(tokens, platform),
        )

    def get_stats(self) -> DatabaseStats:
        """Count entries by tier, category and platform."""
        by_tier = Counter(e.tier.value for e in self._entries)
        by_category = Counter(e.category for e in self._entries)
        by_platform: Counter = Counter()
        for entry in self._entries:
            by_platform.update(entry.platforms)

        return DatabaseStats(
            name=self.name,
            total=len(self._entries),
            by_tier={tier.value: by_tier.get(tier.value, 0) for tier in SignalTier},
            by_category=dict(by_category),
            by_platform=dict(by_platform),
        )
