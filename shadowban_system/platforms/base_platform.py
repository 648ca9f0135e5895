"""Base class for platform adapters.

An adapter knows one platform's URL shapes and writing conventions. It never
raises on malformed input: ``get_url_type`` reports ``valid=False`` instead.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, Optional, Tuple

from loguru import logger
from pydantic import BaseModel, Field
from yarl import URL

from shadowban_system.config.platforms import PLATFORM_NAMES, supports
from shadowban_system.data_management.schemas import ExtractedContent
from shadowban_system.utils.text import (
    CASHTAG_PATTERN,
    HASHTAG_PATTERN,
    MENTION_PATTERN,
    dedupe,
    extract_emojis,
    extract_urls,
)

# Host prefixes folded away before matching
HOST_PREFIXES: Tuple[str, ...] = ("www.", "mobile.", "m.", "old.", "new.", "np.", "i.")


class UrlType(str, Enum):
    PROFILE = "profile"
    POST = "post"
    COMMENT = "comment"
    SUBREDDIT = "subreddit"
    SEARCH = "search"
    HASHTAG = "hashtag"
    OTHER = "other"


class UrlInfo(BaseModel):
    """Classification of a URL on one platform."""

    platform: str
    type: UrlType = UrlType.OTHER
    valid: bool = False
    identifiers: Dict[str, str] = Field(default_factory=dict)
    error: Optional[str] = None


def strip_host(host: str) -> str:
    host = host.lower().rstrip(".")
    changed = True
    while changed:
        changed = False
        for prefix in HOST_PREFIXES:
            if host.startswith(prefix) and host.count(".") > 1:
                host = host[len(prefix):]
                changed = True
    return host


class PlatformAdapter(ABC):
    """
    Abstract platform adapter.

    Attributes:
        platform_id: Stable platform id used across the system
        hosts: Hosts (after prefix folding) that belong to this platform
        canonical_host: Host used in canonical URLs
    """

    platform_id: str = ""
    hosts: Tuple[str, ...] = ()
    canonical_host: str = ""

    def __init__(self):
        self.name = PLATFORM_NAMES.get(self.platform_id, self.platform_id)
        self.logger = logger.bind(component=f"platform.{self.platform_id}")

    def owns_host(self, host: str) -> bool:
        host = strip_host(host)
        return any(host == h or host.endswith("." + h) for h in self.hosts)

    def parse(self, url: str) -> Tuple[Optional[URL], Optional[str]]:
        """Parse ``url`` into a yarl URL on this platform, or return an error message."""
        raw = (url or "").strip()
        if not raw:
            return None, "Empty URL"
        if "://" not in raw:
            raw = "https://" + raw
        try:
            parsed = URL(raw)
        except (ValueError, TypeError) as e:
            return None, f"Malformed URL: {e}"
        if not parsed.host:
            return None, "URL has no host"
        if not self.owns_host(parsed.host):
            return None, f"Not a {self.name} URL"
        return parsed, None

    def get_url_type(self, url: str) -> UrlInfo:
        """
        Classify a URL as profile, post or other and extract its identifiers.

        Args:
            url: URL string, with or without scheme

        Returns:
            UrlInfo; ``valid`` is False with ``error`` set for unusable input
        """
        parsed, error = self.parse(url)
        if parsed is None:
            return UrlInfo(platform=self.platform_id, valid=False, error=error)
        return self.classify(parsed)

    def get_canonical_url(self, url: str) -> str:
        """Fold host aliases onto one canonical form; unusable input comes back stripped."""
        parsed, _ = self.parse(url)
        if parsed is None:
            return (url or "").strip()
        info = self.classify(parsed)
        canonical = self.canonical_for(info)
        if canonical:
            return canonical
        path = parsed.path.rstrip("/") or ""
        return f"https://{self.canonical_host}{path}"

    def extract_content(self, text: str) -> ExtractedContent:
        """
        Extract the token kinds this platform uses from free text.

        Args:
            text: Free text

        Returns:
            ExtractedContent with unsupported kinds left empty
        """
        text = text or ""
        return ExtractedContent(
            hashtags=self.extract_hashtags(text) if self.supports("hashtags") else [],
            cashtags=self.extract_cashtags(text) if self.supports("cashtags") else [],
            mentions=self.extract_mentions(text) if self.supports("mentions") else [],
            urls=extract_urls(text) if self.supports("links") else [],
            emojis=extract_emojis(text) if self.supports("emojis") else [],
        )

    def supports(self, token_kind: str) -> bool:
        return supports(self.platform_id, token_kind)

    def extract_hashtags(self, text: str) -> list:
        return dedupe(["#" + tag.lower() for tag in HASHTAG_PATTERN.findall(text)])

    def extract_cashtags(self, text: str) -> list:
        return dedupe(["$" + tag.upper() for tag in CASHTAG_PATTERN.findall(text)])

    def extract_mentions(self, text: str) -> list:
        return dedupe(["@" + name.lower() for name in MENTION_PATTERN.findall(text)])

    @abstractmethod
    def classify(self, parsed: URL) -> UrlInfo:
        """Classify a parsed URL already known to belong to this platform."""
        pass

    @abstractmethod
    def canonical_for(self, info: UrlInfo) -> Optional[str]:
        """Canonical URL for a classified URL, or None to fall back to host+path."""
        pass
