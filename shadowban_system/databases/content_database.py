"""Content term database with heuristic pattern scanning.

Two independent passes run over free text:
1. Static terms: flagged words and phrases, matched on word boundaries
2. Heuristics: shape-of-text checks (caps, emoji and hashtag volume, repeated
   characters, currency clusters) that each add a fixed score
"""

import re
from typing import Dict, Iterable, List, Optional, Pattern

from shadowban_system.config import flagged_content as rules
from shadowban_system.data_management.schemas import (
    ExtractAndCheckResult,
    PatternHit,
    SignalEntry,
)
from shadowban_system.databases.base_database import SignalDatabase, rows_to_entries
from shadowban_system.utils.text import (
    CURRENCY_CLUSTER_PATTERN,
    HASHTAG_PATTERN,
    MENTION_PATTERN,
    REPEATED_CHAR_PATTERN,
    caps_ratio,
    extract_emojis,
    longest_caps_run,
)


class ContentDatabase(SignalDatabase):
    """
    Flagged words/phrases plus the heuristic content scanner.

    Attributes:
        caps_ratio_threshold: Uppercase share above which caps are excessive
        emoji_threshold: Emoji count above which emojis are excessive
        mention_threshold: Mention count above which mentions are excessive
        hashtag_thresholds: Per-platform hashtag limits
    """

    name = "content"
    token_kind = "content"

    def __init__(
        self,
        entries: Optional[Iterable[SignalEntry]] = None,
        caps_ratio_threshold: float = rules.CAPS_RATIO_THRESHOLD,
        emoji_threshold: int = rules.EMOJI_THRESHOLD,
        mention_threshold: int = rules.MENTION_THRESHOLD,
        hashtag_thresholds: Optional[Dict[str, int]] = None,
    ):
        super().__init__(rows_to_entries(rules.CONTENT_TERMS) if entries is None else entries)
        self.caps_ratio_threshold = caps_ratio_threshold
        self.emoji_threshold = emoji_threshold
        self.mention_threshold = mention_threshold
        self.hashtag_thresholds = dict(hashtag_thresholds or rules.HASHTAG_THRESHOLDS)

        # Word-boundary matchers, one per distinct term
        self._term_patterns: Dict[str, Pattern] = {}
        for entry in self.entries:
            key = self.normalize(entry.token)
            if key not in self._term_patterns:
                self._term_patterns[key] = re.compile(
                    r"(?<!\w)" + re.escape(key) + r"(?!\w)", re.IGNORECASE
                )

    def normalize(self, token: str) -> str:
        return " ".join(token.strip().lower().split())

    def extract_tokens(self, text: str, platform: str) -> List[str]:
        """Terms from the table that occur in ``text`` and apply on ``platform``."""
        found = []
        for key, pattern in self._term_patterns.items():
            if self.lookup(key, platform) is None:
                continue
            if pattern.search(text):
                found.append(key)
        return found

    def scan_patterns(self, text: str, platform: str) -> List[PatternHit]:
        """
        Run the heuristic checks over raw text.

        Args:
            text: Raw text (case preserved)
            platform: Platform id for platform-specific thresholds

        Returns:
            One PatternHit per check that fired
        """
        hits: List[PatternHit] = []
        if not text:
            return hits

        if len(text) > rules.CAPS_MIN_LENGTH:
            ratio = caps_ratio(text)
            if ratio > self.caps_ratio_threshold:
                hits.append(self._hit("excessive_caps", caps_ratio=round(ratio, 2)))

        emoji_count = len(extract_emojis(text))
        if emoji_count > self.emoji_threshold:
            hits.append(self._hit("excessive_emojis", count=emoji_count))

        hashtag_count = len(HASHTAG_PATTERN.findall(text))
        limit = self.hashtag_thresholds.get(platform, rules.DEFAULT_HASHTAG_THRESHOLD)
        if hashtag_count > limit:
            hits.append(self._hit("excessive_hashtags", count=hashtag_count, limit=limit))

        mention_count = len(MENTION_PATTERN.findall(text))
        if mention_count > self.mention_threshold:
            hits.append(self._hit("excessive_mentions", count=mention_count))

        repeated = REPEATED_CHAR_PATTERN.search(text)
        if repeated:
            hits.append(self._hit("repeated_characters", sample=repeated.group(0)))

        currency = CURRENCY_CLUSTER_PATTERN.search(text)
        if currency:
            hits.append(self._hit("currency_cluster", sample=currency.group(0)))

        caps_run = longest_caps_run(text)
        if caps_run >= rules.ALL_CAPS_RUN_THRESHOLD:
            hits.append(self._hit("all_caps_words", run=caps_run))

        return hits

    def extract_and_check(self, text: str, platform: str) -> ExtractAndCheckResult:
        result = super().extract_and_check(text, platform)
        return result.model_copy(update={"patterns": self.scan_patterns(text or "", platform)})

    @staticmethod
    def _hit(code: str, **detail) -> PatternHit:
        return PatternHit(
            code=code,
            message=rules.PATTERN_MESSAGES[code],
            score=rules.PATTERN_SCORES[code],
            detail=detail,
        )
