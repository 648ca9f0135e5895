"""Risky emoji and emoji-combination tables.

Columns of RISKY_EMOJIS: (emoji, tier, platforms, category, notes)

Combinations match when every emoji in the sequence occurs in the text at
least as often as it appears in the sequence.
"""

from typing import Optional, Tuple

EmojiRow = Tuple[str, str, Tuple[str, ...], str, Optional[str]]

_ALL = ("all",)

RISKY_EMOJIS: Tuple[EmojiRow, ...] = (
    # Money
    ("\U0001F4B0", "monitored", _ALL, "money", "Common in crypto scams"),
    ("\U0001F4B5", "monitored", _ALL, "money", None),
    ("\U0001F4B2", "monitored", _ALL, "money", None),
    ("\U0001F911", "monitored", _ALL, "money", None),
    ("\U0001F48E", "monitored", ("twitter",), "crypto", "Diamond hands"),
    ("\U0001F4B8", "monitored", _ALL, "money", None),

    # Adult innuendo
    ("\U0001F346", "restricted", ("instagram", "tiktok", "facebook"), "adult", None),
    ("\U0001F351", "restricted", ("instagram", "tiktok", "facebook"), "adult", None),
    ("\U0001F4A6", "restricted", ("instagram", "tiktok"), "adult", None),

    # Giveaway bait
    ("\U0001F381", "monitored", _ALL, "giveaway", "Common in fake giveaways"),

    # Hype
    ("\U0001F680", "safe", _ALL, "hype", "Risky only in combination"),
    ("\U0001F525", "safe", _ALL, "hype", None),
)

# Columns: (sequence, tier, platforms, category, notes)
RISKY_COMBINATIONS: Tuple[EmojiRow, ...] = (
    ("\U0001F4B0\U0001F680", "restricted", _ALL, "crypto_spam", "Classic pump signal"),
    ("\U0001F4B0\U0001F4B5\U0001F4B2", "restricted", _ALL, "money_spam", "Multiple money emojis"),
    ("\u26A0\u203C", "restricted", _ALL, "clickbait", "Warning/attention combo"),
    ("\U0001F680\U0001F319", "monitored", _ALL, "crypto", "To the moon"),
    ("\U0001F48E\U0001F64C", "monitored", _ALL, "crypto", "Diamond hands"),
    ("\U0001F525\U0001F525\U0001F525", "monitored", _ALL, "spam", "Repeated fire"),
    ("\U0001F381\U0001F389", "monitored", _ALL, "giveaway_spam", "Common in fake giveaways"),
)

# Emojis in a single post above which it reads as spam
EMOJI_SPAM_THRESHOLD = 10
