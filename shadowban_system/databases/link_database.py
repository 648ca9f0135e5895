"""Link and domain reputation database.

Lookup is by registered domain: ``m.facebook.com`` and ``www.facebook.com``
both match an entry for ``facebook.com``. URL patterns (affiliate and
suspicious paths) are matched as substrings of the lowercased URL.
"""

from typing import Iterable, List, Optional, Sequence

from yarl import URL

from shadowban_system.config import flagged_links
from shadowban_system.data_management.schemas import (
    BulkCheckResult,
    SignalEntry,
    SignalTier,
)
from shadowban_system.databases.base_database import SignalDatabase
from shadowban_system.utils.text import extract_urls

SHORTENER = "shortener"
THROTTLED = "throttled_domain"
AGGREGATOR = "link_aggregator"
SPAM_DOMAIN = "spam_domain"
SUSPICIOUS = "suspicious_url"
AFFILIATE = "affiliate"


def domain_of(url: str) -> str:
    """
    Extract the lowercase host of a URL or bare domain, without ``www.``.

    Args:
        url: Absolute URL, scheme-less URL or bare domain

    Returns:
        Host string, or "" if the input cannot be parsed
    """
    raw = (url or "").strip()
    if not raw:
        return ""
    if "://" not in raw:
        raw = "https://" + raw
    try:
        host = URL(raw).host or ""
    except (ValueError, TypeError):
        return ""
    host = host.lower().rstrip(".")
    if host.startswith("www."):
        host = host[4:]
    return host


def _domain_suffixes(domain: str) -> List[str]:
    """``a.b.c.com`` -> [``a.b.c.com``, ``b.c.com``, ``c.com``]."""
    parts = domain.split(".")
    return [".".join(parts[i:]) for i in range(len(parts) - 1)]


def default_link_entries() -> List[SignalEntry]:
    entries: List[SignalEntry] = []
    for domain in sorted(flagged_links.BAD_DOMAINS):
        entries.append(SignalEntry(token=domain, tier=SignalTier.BANNED, category=SPAM_DOMAIN))
    for domain in sorted(flagged_links.LINK_SHORTENERS):
        entries.append(SignalEntry(
            token=domain, tier=SignalTier.MONITORED, category=SHORTENER,
            notes="Shortened links hide the destination",
        ))
    for domain in sorted(flagged_links.LINK_AGGREGATORS):
        entries.append(SignalEntry(token=domain, tier=SignalTier.MONITORED, category=AGGREGATOR))
    for platform, domains in flagged_links.THROTTLED_DOMAINS.items():
        for domain in domains:
            entries.append(SignalEntry(
                token=domain, tier=SignalTier.RESTRICTED, platforms=(platform,),
                category=THROTTLED, notes=f"Deprioritized when linked on {platform}",
            ))
    for pattern in flagged_links.SUSPICIOUS_PATTERNS:
        entries.append(SignalEntry(
            token=pattern, tier=SignalTier.BANNED, category=SUSPICIOUS, kind="pattern",
        ))
    for pattern in flagged_links.AFFILIATE_PATTERNS:
        entries.append(SignalEntry(
            token=pattern, tier=SignalTier.MONITORED, category=AFFILIATE, kind="pattern",
        ))
    return entries


class LinkDatabase(SignalDatabase):
    """Classifies URLs and domains."""

    name = "links"
    token_kind = "links"

    def __init__(self, entries: Optional[Iterable[SignalEntry]] = None):
        super().__init__(default_link_entries() if entries is None else entries)

    def candidates(self, key: str) -> Sequence[SignalEntry]:
        found: List[SignalEntry] = []
        domain = domain_of(key)
        for suffix in _domain_suffixes(domain):
            found.extend(self._index.get(suffix, ()))
        found.extend(e for e in self._scanned if e.token in key)
        return found

    def extract_tokens(self, text: str, platform: str) -> List[str]:
        return extract_urls(text)

    def tokens_in_category(self, result: BulkCheckResult, category: str) -> List[str]:
        """Tokens from a bulk check whose winning entry has ``category``."""
        return [
            m.token for m in result.matches
            if m.entry is not None and m.entry.category == category
        ]

    def shorteners(self, result: BulkCheckResult) -> List[str]:
        return self.tokens_in_category(result, SHORTENER)

    def throttled(self, result: BulkCheckResult) -> List[str]:
        return self.tokens_in_category(result, THROTTLED)
