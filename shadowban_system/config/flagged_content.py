"""Flagged content terms and heuristic pattern thresholds.

Columns of CONTENT_TERMS: (term, tier, platforms, category, notes)

Terms are matched case-insensitively on word boundaries, so "kill" does not
fire on "skills".
"""

from typing import Dict, Optional, Tuple

ContentRow = Tuple[str, str, Tuple[str, ...], str, Optional[str]]

_ALL = ("all",)

CONTENT_TERMS: Tuple[ContentRow, ...] = (
    # Violence
    ("kill", "banned", _ALL, "violence", "Context-dependent, often triggers review"),
    ("murder", "banned", _ALL, "violence", None),
    ("bomb", "banned", _ALL, "violence", None),
    ("terrorist", "banned", _ALL, "violence", None),
    ("massacre", "banned", _ALL, "violence", None),
    ("death threat", "banned", _ALL, "violence", None),
    ("attack", "restricted", _ALL, "violence", "Context-dependent"),

    # Hate
    ("white power", "banned", _ALL, "hate", None),
    ("master race", "banned", _ALL, "hate", None),
    ("subhuman", "banned", _ALL, "hate", None),

    # Spam and scams
    ("buy followers", "banned", _ALL, "spam", None),
    ("free bitcoin", "banned", _ALL, "scam", None),
    ("double your money", "banned", _ALL, "scam", None),
    ("guaranteed returns", "banned", _ALL, "scam", None),
    ("send me crypto", "banned", _ALL, "scam", None),
    ("dm for promo", "restricted", _ALL, "spam", None),
    ("click the link", "restricted", _ALL, "spam", None),
    ("make money fast", "restricted", _ALL, "spam", None),
    ("work from home", "monitored", _ALL, "spam", None),

    # Crypto
    ("token sale", "restricted", _ALL, "crypto", None),
    ("nft", "monitored", _ALL, "crypto", None),
    ("crypto", "monitored", ("instagram", "facebook"), "crypto", "Increased scrutiny"),
    ("presale", "monitored", ("twitter",), "crypto", None),
    ("financial advice", "monitored", _ALL, "crypto", None),

    # Sensitive
    ("suicide", "restricted", _ALL, "sensitive", "Supportive context allowed"),
    ("self harm", "restricted", _ALL, "sensitive", None),
    ("eating disorder", "restricted", _ALL, "sensitive", None),
    ("depression", "monitored", _ALL, "sensitive", None),

    # Engagement bait
    ("follow for follow", "restricted", _ALL, "engagement_bait", "Reduces reach significantly"),
    ("f4f", "restricted", _ALL, "engagement_bait", None),
    ("like for like", "restricted", _ALL, "engagement_bait", None),
    ("l4l", "restricted", _ALL, "engagement_bait", None),
    ("comment if you agree", "monitored", _ALL, "engagement_bait", None),
    ("share if you", "monitored", _ALL, "engagement_bait", None),
    ("tag someone who", "monitored", ("instagram",), "engagement_bait", None),

    # Clickbait
    ("you wont believe", "monitored", _ALL, "clickbait", None),
    ("shocking", "monitored", _ALL, "clickbait", None),
    ("watch till end", "monitored", ("tiktok",), "clickbait", None),

    # Overused
    ("breaking", "monitored", ("twitter",), "overused", None),
    ("leaked", "monitored", _ALL, "overused", None),
    ("exposed", "monitored", _ALL, "overused", None),
)

# Heuristic checks: fixed score added when the check fires
PATTERN_SCORES: Dict[str, int] = {
    "excessive_caps": 5,
    "excessive_emojis": 5,
    "excessive_hashtags": 10,
    "excessive_mentions": 10,
    "repeated_characters": 5,
    "currency_cluster": 5,
    "all_caps_words": 5,
}

PATTERN_MESSAGES: Dict[str, str] = {
    "excessive_caps": "Excessive use of capital letters may reduce reach",
    "excessive_emojis": "High emoji count may trigger spam filters",
    "excessive_hashtags": "Too many hashtags may reduce visibility",
    "excessive_mentions": "Mass mentioning may be flagged as spam",
    "repeated_characters": "Repeated characters may trigger spam detection",
    "currency_cluster": "Multiple money symbols may trigger promotional content filters",
    "all_caps_words": "Multiple consecutive all-caps words may appear spammy",
}

CAPS_RATIO_THRESHOLD = 0.5
CAPS_MIN_LENGTH = 20
EMOJI_THRESHOLD = 10
MENTION_THRESHOLD = 5
ALL_CAPS_RUN_THRESHOLD = 3

HASHTAG_THRESHOLDS: Dict[str, int] = {
    "twitter": 5,
    "instagram": 15,
    "linkedin": 5,
    "tiktok": 5,
    "facebook": 10,
    "reddit": 0,
}
DEFAULT_HASHTAG_THRESHOLD = 5
