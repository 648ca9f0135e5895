"""Flagged mention table and account-name heuristics.

Columns of MENTION_PREFIXES: (prefix, tier, platforms, category, notes)

A mention matches a row when its normalized form (``@name`` lowercase)
starts with the prefix. Specific real accounts are deliberately not listed;
live account status belongs to the platform data source.
"""

from typing import Optional, Tuple

MentionRow = Tuple[str, str, Tuple[str, ...], str, Optional[str]]

MENTION_PREFIXES: Tuple[MentionRow, ...] = (
    ("@follow4follow", "banned", ("twitter", "instagram"), "spam_bot", "Follow-back bot pattern"),
    ("@free_followers", "banned", ("twitter", "instagram"), "spam_bot", "Fake follower seller pattern"),
    ("@gain_", "restricted", ("twitter",), "spam_bot", "Growth scheme bot prefix"),
    ("@crypto_signals", "restricted", ("twitter",), "spam_bot", "Crypto signal bot pattern"),
    ("@anon", "monitored", ("twitter",), "anonymous", "Not all anon accounts are problematic"),
    ("u/automoderator", "safe", ("reddit",), "moderation", None),
)

# Regex heuristics applied to names no row matched: (pattern, tier, category)
SPAM_NAME_PATTERNS: Tuple[Tuple[str, str, str], ...] = (
    (r"^@?(follow|gain|free|crypto|nft|airdrop)(_|\d)", "restricted", "spam_name"),
    (r"^@?(rt|retweet|like|follow)(4|for)", "restricted", "engagement_bot"),
    (r"^@?[a-z]{2,3}\d{6,}$", "monitored", "generated_name"),
    (r"^@?[a-z]+\d{4,}$", "monitored", "generated_name"),
)

BOT_NAME_PATTERNS: Tuple[Tuple[str, str, str], ...] = (
    (r"bot$", "monitored", "bot_name"),
    (r"_bot_", "monitored", "bot_name"),
)

# Mentions in a single post above which the post reads as mass-tagging
MASS_MENTION_THRESHOLD = 5
