"""Platform capabilities and host recognition.

Each platform lists the token kinds its users actually write. Signal databases
and adapters consult this table so that, for example, cashtags are never
extracted from a Reddit post.
"""

from typing import Dict, FrozenSet, List, Tuple

TOKEN_KINDS: Tuple[str, ...] = ("hashtags", "cashtags", "mentions", "links", "emojis", "content")

PLATFORM_CAPABILITIES: Dict[str, FrozenSet[str]] = {
    "twitter": frozenset({"hashtags", "cashtags", "mentions", "links", "emojis", "content"}),
    "reddit": frozenset({"mentions", "links", "emojis", "content"}),
    "instagram": frozenset({"hashtags", "mentions", "links", "emojis", "content"}),
    "tiktok": frozenset({"hashtags", "cashtags", "mentions", "links", "emojis", "content"}),
    "facebook": frozenset({"hashtags", "mentions", "links", "emojis", "content"}),
    "youtube": frozenset({"mentions", "links", "emojis", "content"}),
    "linkedin": frozenset({"hashtags", "mentions", "links", "emojis", "content"}),
}

PLATFORM_NAMES: Dict[str, str] = {
    "twitter": "Twitter/X",
    "reddit": "Reddit",
    "instagram": "Instagram",
    "tiktok": "TikTok",
    "facebook": "Facebook",
    "youtube": "YouTube",
    "linkedin": "LinkedIn",
}

# Host substrings checked in order; first hit wins
PLATFORM_HOSTS: List[Tuple[str, str]] = [
    ("twitter.com", "twitter"),
    ("x.com", "twitter"),
    ("reddit.com", "reddit"),
    ("redd.it", "reddit"),
    ("instagram.com", "instagram"),
    ("tiktok.com", "tiktok"),
    ("facebook.com", "facebook"),
    ("fb.com", "facebook"),
    ("youtube.com", "youtube"),
    ("youtu.be", "youtube"),
    ("linkedin.com", "linkedin"),
]

# Aliases accepted for a platform id on input
PLATFORM_ALIASES: Dict[str, str] = {
    "x": "twitter",
    "ig": "instagram",
    "fb": "facebook",
    "yt": "youtube",
}


def supports(platform: str, token_kind: str) -> bool:
    """Return True if ``platform`` uses ``token_kind``. Unknown platforms support everything."""
    capabilities = PLATFORM_CAPABILITIES.get(platform)
    if capabilities is None:
        return True
    return token_kind in capabilities
