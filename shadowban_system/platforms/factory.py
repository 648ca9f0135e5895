"""Platform detection and adapter lookup."""

from functools import lru_cache
from typing import List, Optional

from yarl import URL

from shadowban_system.config.platforms import PLATFORM_ALIASES, PLATFORM_HOSTS
from shadowban_system.errors import ValidationError
from shadowban_system.platforms.base_platform import PlatformAdapter, strip_host
from shadowban_system.platforms.generic import GENERIC_PLATFORMS, GenericPlatformAdapter
from shadowban_system.platforms.reddit import RedditAdapter
from shadowban_system.platforms.twitter import TwitterAdapter

_BESPOKE = {
    "twitter": TwitterAdapter,
    "reddit": RedditAdapter,
}


def supported_platforms() -> List[str]:
    return list(_BESPOKE) + [p for p in GENERIC_PLATFORMS if p not in _BESPOKE]


def normalize_platform(platform: str) -> str:
    value = (platform or "").strip().lower()
    return PLATFORM_ALIASES.get(value, value)


def detect_platform(url: str) -> Optional[str]:
    """
    Detect the platform a URL belongs to.

    Args:
        url: URL with or without scheme

    Returns:
        Platform id, or None if the host is not recognized or the URL is malformed
    """
    raw = (url or "").strip()
    if not raw:
        return None
    if "://" not in raw:
        raw = "https://" + raw
    try:
        host = URL(raw).host
    except (ValueError, TypeError):
        return None
    if not host:
        return None

    host = strip_host(host)
    for suffix, platform in PLATFORM_HOSTS:
        if host == suffix or host.endswith("." + suffix):
            return platform
    return None


@lru_cache(maxsize=None)
def get_adapter(platform: str) -> PlatformAdapter:
    """
    Return the shared adapter for a platform.

    Raises:
        ValidationError: If the platform is not supported
    """
    platform = normalize_platform(platform)
    if platform in _BESPOKE:
        return _BESPOKE[platform]()
    if platform in GENERIC_PLATFORMS:
        return GenericPlatformAdapter(platform)
    raise ValidationError(f"Unsupported platform: {platform!r}", field="platform")
