"""Link and domain reputation tables.

Domains are stored lowercase without a ``www.`` prefix. Patterns are matched
as substrings of the full lowercased URL.
"""

from typing import Dict, FrozenSet, Tuple

# Known spam, phishing and engagement-farming domains
BAD_DOMAINS: FrozenSet[str] = frozenset({
    "spam-site.com",
    "free-followers.net",
    "get-likes-now.com",
    "buy-followers.io",
    "instant-fame.co",
    "viral-boost.net",
    "follow4follow.xyz",
    "like4like.club",
    "secure-login-verify.com",
    "account-verify-now.net",
    "download-free-stuff.ru",
    "crack-software.to",
})

LINK_SHORTENERS: FrozenSet[str] = frozenset({
    "bit.ly",
    "tinyurl.com",
    "goo.gl",
    "ow.ly",
    "t.co",
    "is.gd",
    "v.gd",
    "buff.ly",
    "j.mp",
    "s.id",
    "adf.ly",
    "shorturl.at",
    "rb.gy",
    "cutt.ly",
    "lnk.to",
    "smarturl.it",
    "dub.sh",
    "short.io",
    "rebrand.ly",
    "amzn.to",
})

LINK_AGGREGATORS: FrozenSet[str] = frozenset({
    "linktr.ee",
    "linktree.com",
    "lnk.bio",
    "beacons.ai",
    "carrd.co",
    "bio.link",
    "allmylinks.com",
    "solo.to",
    "hoo.be",
})

# Domains a platform is known to deprioritize when linked from a post
THROTTLED_DOMAINS: Dict[str, Tuple[str, ...]] = {
    "twitter": ("facebook.com", "instagram.com", "threads.net", "bsky.app", "substack.com"),
    "reddit": ("zerohedge.com", "rt.com", "clickbait-news.com", "viral-content-farm.net"),
    "instagram": ("linktree.com", "taplink.cc", "tiktok.com", "snapchat.com"),
    "tiktok": ("youtube.com", "instagram.com", "twitter.com", "x.com"),
    "facebook": ("tiktok.com", "twitter.com", "x.com"),
    "youtube": ("tiktok.com", "dailymotion.com", "vimeo.com"),
}

AFFILIATE_PATTERNS: Tuple[str, ...] = (
    "?ref=",
    "&ref=",
    "?aff=",
    "&aff=",
    "?affiliate=",
    "?partner=",
    "?referral=",
    "/affiliate/",
    "/ref/",
    "associate-id=",
    "clickid=",
    "subid=",
    "amazon.com/gp/product",
    "shareasale.com",
    "clickbank.net",
)

SUSPICIOUS_PATTERNS: Tuple[str, ...] = (
    "free-followers",
    "buy-likes",
    "get-followers",
    "instant-fans",
    "boost-engagement",
    "follow-bot",
    "like-bot",
    "guaranteed-returns",
    "double-bitcoin",
    "crypto-giveaway",
    "free-crypto",
    "cash-app-flip",
    "free-spins",
)
