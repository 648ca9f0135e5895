"""Platform adapters: URL recognition, canonicalization and lexical extraction."""

from shadowban_system.platforms.base_platform import (
    PlatformAdapter,
    UrlInfo,
    UrlType,
)
from shadowban_system.platforms.factory import (
    detect_platform,
    get_adapter,
    normalize_platform,
    supported_platforms,
)
from shadowban_system.platforms.generic import GenericPlatformAdapter
from shadowban_system.platforms.reddit import RedditAdapter
from shadowban_system.platforms.twitter import TwitterAdapter

__all__ = [
    "PlatformAdapter",
    "UrlInfo",
    "UrlType",
    "detect_platform",
    "get_adapter",
    "normalize_platform",
    "supported_platforms",
    "GenericPlatformAdapter",
    "RedditAdapter",
    "TwitterAdapter",
]
