"""Reddit platform adapter.

Reddit has no hashtag or cashtag convention; users are referenced as
``u/name`` and communities as ``r/name``.
"""

import re
from typing import List, Optional

from yarl import URL

from shadowban_system.platforms.base_platform import (
    PlatformAdapter,
    UrlInfo,
    UrlType,
    strip_host,
)
from shadowban_system.utils.text import REDDIT_USER_PATTERN, SUBREDDIT_PATTERN, dedupe

POST_PATH = re.compile(r"^/r/(\w+)/comments/(\w+)(?:/[^/]*(?:/(\w+))?)?")
BARE_POST_PATH = re.compile(r"^/comments/(\w+)")
USER_PATH = re.compile(r"^/u(?:ser)?/([\w-]+)")
SUBREDDIT_PATH = re.compile(r"^/r/(\w+)/?$")
SHORT_POST_PATH = re.compile(r"^/(\w+)/?$")
MARKDOWN_LINK = re.compile(r"\[([^\]]+)\]\(([^)\s]+)\)")


class RedditAdapter(PlatformAdapter):
    """Adapter for reddit.com, old./new./np. mirrors and redd.it short links."""

    platform_id = "reddit"
    hosts = ("reddit.com", "redd.it")
    canonical_host = "reddit.com"

    def classify(self, parsed: URL) -> UrlInfo:
        path = parsed.path
        host = strip_host(parsed.host or "")

        if host == "redd.it":
            match = SHORT_POST_PATH.match(path)
            if match:
                return self._info(UrlType.POST, post_id=match.group(1))
            return UrlInfo(platform=self.platform_id, valid=False, error="Unrecognized redd.it link")

        match = POST_PATH.match(path)
        if match:
            subreddit, post_id, comment_id = match.groups()
            if comment_id:
                return self._info(
                    UrlType.COMMENT, subreddit=subreddit, post_id=post_id, comment_id=comment_id
                )
            return self._info(UrlType.POST, subreddit=subreddit, post_id=post_id)

        match = BARE_POST_PATH.match(path)
        if match:
            return self._info(UrlType.POST, post_id=match.group(1))

        match = USER_PATH.match(path)
        if match:
            return self._info(UrlType.PROFILE, username=match.group(1))

        match = SUBREDDIT_PATH.match(path)
        if match:
            return self._info(UrlType.SUBREDDIT, subreddit=match.group(1))

        if path.startswith("/search"):
            return self._info(UrlType.SEARCH, **({"query": parsed.query["q"]} if "q" in parsed.query else {}))

        return UrlInfo(platform=self.platform_id, type=UrlType.OTHER, valid=True)

    def canonical_for(self, info: UrlInfo) -> Optional[str]:
        ids = info.identifiers
        if info.type in (UrlType.POST, UrlType.COMMENT):
            if "subreddit" in ids:
                base = f"https://reddit.com/r/{ids['subreddit']}/comments/{ids['post_id']}"
                if info.type == UrlType.COMMENT:
                    return f"{base}/_/{ids['comment_id']}"
                return base
            return f"https://reddit.com/comments/{ids['post_id']}"
        if info.type == UrlType.PROFILE:
            return f"https://reddit.com/user/{ids['username']}"
        if info.type == UrlType.SUBREDDIT:
            return f"https://reddit.com/r/{ids['subreddit']}"
        return None

    def extract_mentions(self, text: str) -> list:
        return dedupe(["u/" + name.lower() for name in REDDIT_USER_PATTERN.findall(text)])

    def extract_subreddits(self, text: str) -> List[str]:
        return dedupe(["r/" + name.lower() for name in SUBREDDIT_PATTERN.findall(text or "")])

    def extract_markdown_links(self, text: str) -> List[dict]:
        return [
            {"text": label, "url": url}
            for label, url in MARKDOWN_LINK.findall(text or "")
        ]

    def _info(self, url_type: UrlType, **identifiers) -> UrlInfo:
        return UrlInfo(
            platform=self.platform_id, type=url_type, valid=True, identifiers=identifiers
        )
