"""Risky emoji and emoji-combination database."""

from collections import Counter
from typing import Iterable, List, Optional

from shadowban_system.config.flagged_emojis import RISKY_COMBINATIONS, RISKY_EMOJIS
from shadowban_system.data_management.schemas import SignalEntry
from shadowban_system.databases.base_database import SignalDatabase, rows_to_entries
from shadowban_system.utils.text import dedupe, extract_emojis

VARIATION_SELECTOR = "\ufe0f"


class EmojiDatabase(SignalDatabase):
    """
    Classifies single emojis and emoji combinations.

    A combination token is the concatenation of its emojis, e.g. the money
    bag followed by the rocket. It is extracted from text when each emoji in
    it occurs at least as many times as the combination requires.
    """

    name = "emojis"
    token_kind = "emojis"

    def __init__(self, entries: Optional[Iterable[SignalEntry]] = None):
        if entries is None:
            entries = (
                rows_to_entries(RISKY_EMOJIS)
                + rows_to_entries(RISKY_COMBINATIONS, kind="combination")
            )
        super().__init__(entries)
        self._combinations = [
            (self.normalize(e.token), Counter(extract_emojis(e.token)))
            for e in self.entries if e.kind == "combination"
        ]

    def normalize(self, token: str) -> str:
        return token.strip().replace(VARIATION_SELECTOR, "")

    def extract_tokens(self, text: str, platform: str) -> List[str]:
        return self.expand(extract_emojis(text))

    def expand(self, emojis: List[str]) -> List[str]:
        """Distinct emojis plus every risky combination the sequence completes."""
        if not emojis:
            return []
        present = Counter(emojis)
        combos = [
            token for token, needed in self._combinations
            if all(present[e] >= n for e, n in needed.items())
        ]
        return dedupe(emojis) + dedupe(combos)
