"""Table-driven adapters for platforms without bespoke URL logic.

Each rule is matched against ``host + path?query`` after host-prefix folding,
so ``https://m.youtube.com/watch?v=...`` and ``youtu.be/...`` land on the
same canonical URL.
"""

import re
from typing import Dict, List, NamedTuple, Optional, Tuple

from yarl import URL

from shadowban_system.platforms.base_platform import (
    PlatformAdapter,
    UrlInfo,
    UrlType,
    strip_host,
)


class UrlRule(NamedTuple):
    url_type: UrlType
    pattern: str
    groups: Tuple[str, ...]
    canonical: str


GENERIC_PLATFORMS: Dict[str, dict] = {
    "instagram": {
        "hosts": ("instagram.com", "instagr.am"),
        "canonical_host": "instagram.com",
        "reserved": {"explore", "accounts", "direct", "stories", "reels", "about"},
        "rules": [
            UrlRule(UrlType.POST, r"^instagram\.com/(?:p|reel|tv)/([\w-]+)", ("post_id",),
                    "https://instagram.com/p/{post_id}"),
            UrlRule(UrlType.PROFILE, r"^instagram\.com/([\w.]+)/?(?:\?|$)", ("username",),
                    "https://instagram.com/{username}"),
        ],
    },
    "tiktok": {
        "hosts": ("tiktok.com",),
        "canonical_host": "tiktok.com",
        "reserved": set(),
        "rules": [
            UrlRule(UrlType.POST, r"^tiktok\.com/@([\w.]+)/video/(\d+)", ("username", "post_id"),
                    "https://tiktok.com/@{username}/video/{post_id}"),
            UrlRule(UrlType.PROFILE, r"^tiktok\.com/@([\w.]+)/?(?:\?|$)", ("username",),
                    "https://tiktok.com/@{username}"),
            UrlRule(UrlType.HASHTAG, r"^tiktok\.com/tag/(\w+)", ("hashtag",),
                    "https://tiktok.com/tag/{hashtag}"),
        ],
    },
    "facebook": {
        "hosts": ("facebook.com", "fb.com"),
        "canonical_host": "facebook.com",
        "reserved": {"watch", "groups", "events", "marketplace", "login", "pages", "help"},
        "rules": [
            UrlRule(UrlType.POST, r"^(?:facebook|fb)\.com/([\w.]+)/posts/(\w+)", ("username", "post_id"),
                    "https://facebook.com/{username}/posts/{post_id}"),
            UrlRule(UrlType.PROFILE, r"^(?:facebook|fb)\.com/([\w.]+)/?(?:\?|$)", ("username",),
                    "https://facebook.com/{username}"),
        ],
    },
    "youtube": {
        "hosts": ("youtube.com", "youtu.be"),
        "canonical_host": "youtube.com",
        "reserved": set(),
        "rules": [
            UrlRule(UrlType.POST, r"^youtube\.com/watch\?(?:.*&)?v=([\w-]{11})", ("post_id",),
                    "https://youtube.com/watch?v={post_id}"),
            UrlRule(UrlType.POST, r"^youtube\.com/shorts/([\w-]{11})", ("post_id",),
                    "https://youtube.com/watch?v={post_id}"),
            UrlRule(UrlType.POST, r"^youtu\.be/([\w-]{11})", ("post_id",),
                    "https://youtube.com/watch?v={post_id}"),
            UrlRule(UrlType.PROFILE, r"^youtube\.com/@([\w.-]+)", ("username",),
                    "https://youtube.com/@{username}"),
            UrlRule(UrlType.PROFILE, r"^youtube\.com/(?:channel|c|user)/([\w-]+)", ("channel_id",),
                    "https://youtube.com/channel/{channel_id}"),
        ],
    },
    "linkedin": {
        "hosts": ("linkedin.com",),
        "canonical_host": "linkedin.com",
        "reserved": set(),
        "rules": [
            UrlRule(UrlType.POST, r"^linkedin\.com/posts/([\w-]+)", ("post_id",),
                    "https://linkedin.com/posts/{post_id}"),
            UrlRule(UrlType.POST, r"^linkedin\.com/feed/update/(urn:li:activity:\d+)", ("post_id",),
                    "https://linkedin.com/feed/update/{post_id}"),
            UrlRule(UrlType.PROFILE, r"^linkedin\.com/in/([\w-]+)", ("username",),
                    "https://linkedin.com/in/{username}"),
        ],
    },
}


class GenericPlatformAdapter(PlatformAdapter):
    """Adapter configured from a GENERIC_PLATFORMS entry."""

    def __init__(self, platform_id: str, table: Optional[dict] = None):
        table = table or GENERIC_PLATFORMS[platform_id]
        self.platform_id = platform_id
        self.hosts = tuple(table["hosts"])
        self.canonical_host = table["canonical_host"]
        self.reserved = frozenset(table.get("reserved", ()))
        self.rules: List[Tuple[UrlRule, re.Pattern]] = [
            (rule, re.compile(rule.pattern, re.IGNORECASE)) for rule in table["rules"]
        ]
        super().__init__()

    def classify(self, parsed: URL) -> UrlInfo:
        target = strip_host(parsed.host or "") + parsed.path_qs
        for rule, pattern in self.rules:
            match = pattern.match(target)
            if not match:
                continue
            identifiers = dict(zip(rule.groups, match.groups()))
            if rule.url_type == UrlType.PROFILE and identifiers.get("username", "").lower() in self.reserved:
                continue
            return UrlInfo(
                platform=self.platform_id, type=rule.url_type, valid=True, identifiers=identifiers
            )
        return UrlInfo(platform=self.platform_id, type=UrlType.OTHER, valid=True)

    def canonical_for(self, info: UrlInfo) -> Optional[str]:
        if info.type == UrlType.OTHER:
            return None
        for rule, _ in self.rules:
            if rule.url_type == info.type and set(rule.groups) == set(info.identifiers):
                return rule.canonical.format(**info.identifiers)
        return None
