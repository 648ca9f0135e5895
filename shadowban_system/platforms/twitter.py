"""Twitter/X platform adapter."""

import re
from typing import Optional

from yarl import URL

from shadowban_system.platforms.base_platform import PlatformAdapter, UrlInfo, UrlType

TWEET_PATH = re.compile(r"^/(?:#!/)?(\w{1,15})/status(?:es)?/(\d+)")
WEB_TWEET_PATH = re.compile(r"^/i/web/status/(\d+)")
PROFILE_PATH = re.compile(r"^/(\w{1,15})/?$")
HASHTAG_PATH = re.compile(r"^/hashtag/(\w+)")

# First path segments that are site sections, not usernames
RESERVED_PATHS = frozenset({
    "home", "explore", "notifications", "messages", "settings", "i",
    "search", "login", "signup", "tos", "privacy", "compose", "intent",
})


class TwitterAdapter(PlatformAdapter):
    """Adapter for twitter.com and its x.com / mobile aliases."""

    platform_id = "twitter"
    hosts = ("twitter.com", "x.com")
    canonical_host = "twitter.com"

    def classify(self, parsed: URL) -> UrlInfo:
        path = parsed.path

        match = TWEET_PATH.match(path)
        if match and match.group(1).lower() not in RESERVED_PATHS:
            return UrlInfo(
                platform=self.platform_id,
                type=UrlType.POST,
                valid=True,
                identifiers={"username": match.group(1), "post_id": match.group(2)},
            )

        match = WEB_TWEET_PATH.match(path)
        if match:
            return UrlInfo(
                platform=self.platform_id,
                type=UrlType.POST,
                valid=True,
                identifiers={"post_id": match.group(1)},
            )

        if path.startswith("/search"):
            query = parsed.query.get("q", "")
            return UrlInfo(
                platform=self.platform_id,
                type=UrlType.SEARCH,
                valid=True,
                identifiers={"query": query} if query else {},
            )

        match = HASHTAG_PATH.match(path)
        if match:
            return UrlInfo(
                platform=self.platform_id,
                type=UrlType.HASHTAG,
                valid=True,
                identifiers={"hashtag": match.group(1)},
            )

        match = PROFILE_PATH.match(path)
        if match and match.group(1).lower() not in RESERVED_PATHS:
            return UrlInfo(
                platform=self.platform_id,
                type=UrlType.PROFILE,
                valid=True,
                identifiers={"username": match.group(1)},
            )

        return UrlInfo(platform=self.platform_id, type=UrlType.OTHER, valid=True)

    def canonical_for(self, info: UrlInfo) -> Optional[str]:
        ids = info.identifiers
        if info.type == UrlType.POST:
            if "username" in ids:
                return f"https://twitter.com/{ids['username']}/status/{ids['post_id']}"
            return f"https://twitter.com/i/web/status/{ids['post_id']}"
        if info.type == UrlType.PROFILE:
            return f"https://twitter.com/{ids['username']}"
        if info.type == UrlType.HASHTAG:
            return f"https://twitter.com/hashtag/{ids['hashtag']}"
        return None
