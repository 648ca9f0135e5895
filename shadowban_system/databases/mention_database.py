"""Mention (account handle) signal database."""

import re
from typing import Iterable, List, Optional, Sequence

from shadowban_system.config import flagged_mentions
from shadowban_system.data_management.schemas import SignalEntry, SignalTier
from shadowban_system.databases.base_database import SignalDatabase, rows_to_entries
from shadowban_system.utils.text import MENTION_PATTERN, REDDIT_USER_PATTERN, dedupe


def bare_handle(token: str) -> str:
    """Strip ``@``, ``u/`` or ``/u/`` and lowercase."""
    token = token.strip().lower()
    for sigil in ("/u/", "u/", "@"):
        if token.startswith(sigil):
            return token[len(sigil):]
    return token


def _pattern_entries() -> List[SignalEntry]:
    entries = []
    for pattern, tier, category in (
        flagged_mentions.SPAM_NAME_PATTERNS + flagged_mentions.BOT_NAME_PATTERNS
    ):
        entries.append(SignalEntry(
            token=pattern, tier=SignalTier(tier), category=category, kind="pattern",
        ))
    return entries


class MentionDatabase(SignalDatabase):
    """
    Classifies mentioned handles by known prefixes and name heuristics.

    Reddit handles are kept as ``u/name``; every other platform uses ``@name``.
    """

    name = "mentions"
    token_kind = "mentions"

    def __init__(self, entries: Optional[Iterable[SignalEntry]] = None):
        if entries is None:
            entries = (
                rows_to_entries(flagged_mentions.MENTION_PREFIXES, kind="prefix")
                + _pattern_entries()
            )
        super().__init__(entries)
        self._compiled = {
            e.token: re.compile(e.token, re.IGNORECASE)
            for e in self._scanned if e.kind == "pattern"
        }

    def normalize(self, token: str) -> str:
        handle = bare_handle(token)
        if not handle:
            return ""
        if token.strip().lower().lstrip("/").startswith("u/"):
            return "u/" + handle
        return "@" + handle

    def candidates(self, key: str) -> Sequence[SignalEntry]:
        handle = bare_handle(key)
        found: List[SignalEntry] = []
        for entry in self._scanned:
            if entry.kind == "prefix" and key.startswith(entry.token.lower()):
                found.append(entry)
            elif entry.kind == "pattern" and self._compiled[entry.token].search(handle):
                found.append(entry)
        return found

    def extract_tokens(self, text: str, platform: str) -> List[str]:
        if platform == "reddit":
            return dedupe(["u/" + m.lower() for m in REDDIT_USER_PATTERN.findall(text)])
        return dedupe(["@" + m.lower() for m in MENTION_PATTERN.findall(text)])

    def check_username(self, username: str, platform: str) -> Optional[SignalEntry]:
        """Classify an account's own handle, used when no live data is available."""
        prefix = "u/" if platform == "reddit" else "@"
        return self.lookup(prefix + bare_handle(username), platform)
