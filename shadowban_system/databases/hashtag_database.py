"""Hashtag and cashtag signal database."""

from typing import Iterable, List, Optional

from shadowban_system.config.flagged_hashtags import CASHTAGS, HASHTAGS
from shadowban_system.config.platforms import supports
from shadowban_system.data_management.schemas import BulkCheckResult, SignalEntry
from shadowban_system.databases.base_database import SignalDatabase, rows_to_entries
from shadowban_system.utils.text import CASHTAG_PATTERN, HASHTAG_PATTERN, dedupe


def normalize_tag(tag: str) -> str:
    """Normalize a tag: ``$TAG`` uppercase, anything else ``#tag`` lowercase."""
    tag = tag.strip()
    if tag.startswith("$"):
        return "$" + tag[1:].upper()
    return "#" + tag.lstrip("#").lower()


class HashtagDatabase(SignalDatabase):
    """
    Classifies hashtags and cashtags.

    Tags may be given with or without a sigil: ``followback``, ``#followback``
    and ``#FollowBack`` all resolve to the same entry.
    """

    name = "hashtags"
    token_kind = "hashtags"

    def __init__(self, entries: Optional[Iterable[SignalEntry]] = None):
        if entries is None:
            entries = rows_to_entries(HASHTAGS) + rows_to_entries(CASHTAGS)
        super().__init__(entries)

    def normalize(self, token: str) -> str:
        if not token.strip().lstrip("#$"):
            return ""
        return normalize_tag(token)

    def extract_hashtags(self, text: str, platform: str) -> List[str]:
        if not supports(platform, "hashtags"):
            return []
        return dedupe(["#" + m.lower() for m in HASHTAG_PATTERN.findall(text)])

    def extract_cashtags(self, text: str, platform: str) -> List[str]:
        if not supports(platform, "cashtags"):
            return []
        return dedupe(["$" + m.upper() for m in CASHTAG_PATTERN.findall(text)])

    def extract_tokens(self, text: str, platform: str) -> List[str]:
        return self.extract_hashtags(text, platform) + self.extract_cashtags(text, platform)

    def check_hashtags(self, tags: Iterable[str], platform: str) -> BulkCheckResult:
        """Bulk check tags, treating bare words as hashtags."""
        return self.check_bulk(tags, platform)

    def check_cashtags(self, tags: Iterable[str], platform: str) -> BulkCheckResult:
        """Bulk check tags, treating bare words as cashtags."""
        return self.check_bulk(
            [t if t.strip().startswith("$") else "$" + t.strip().lstrip("#") for t in tags],
            platform,
        )
