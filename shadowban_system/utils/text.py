"""Lexical helpers shared by the platform adapters and signal databases."""

import re
from typing import List

HASHTAG_PATTERN = re.compile(r"(?<![\w&])#(\w+)")
CASHTAG_PATTERN = re.compile(r"(?<!\w)\$([A-Za-z][A-Za-z0-9]{0,9})\b")
MENTION_PATTERN = re.compile(r"(?<![\w.])@(\w{1,30})")
REDDIT_USER_PATTERN = re.compile(r"(?:^|(?<=\s))/?u/(\w{3,20})")
SUBREDDIT_PATTERN = re.compile(r"(?:^|(?<=\s))/?r/(\w{2,21})")
URL_PATTERN = re.compile(r"(?:https?://|www\.)[^\s<>\"']+", re.IGNORECASE)
EMOJI_PATTERN = re.compile(
    "["
    "\U0001F300-\U0001FAFF"
    "\u2600-\u27BF"
    "\u2B00-\u2BFF"
    "\u203C\u2049"
    "]"
)
REPEATED_CHAR_PATTERN = re.compile(r"(.)\1{4,}")
CURRENCY_CLUSTER_PATTERN = re.compile("[$€£¥₿]{2,}|\U0001F4B0{3,}|\U0001F911{2,}")

_TRAILING_PUNCTUATION = ".,;:!?)]}'\""
_WHITESPACE = re.compile(r"\s+")


def dedupe(items: List[str]) -> List[str]:
    """Drop repeats while keeping first-seen order."""
    seen = set()
    unique = []
    for item in items:
        if item not in seen:
            seen.add(item)
            unique.append(item)
    return unique


def extract_urls(text: str) -> List[str]:
    urls = []
    for match in URL_PATTERN.finditer(text or ""):
        urls.append(match.group(0).rstrip(_TRAILING_PUNCTUATION))
    return dedupe(urls)


def extract_emojis(text: str) -> List[str]:
    """Every emoji character in order, repeats included."""
    return EMOJI_PATTERN.findall(text or "")


def caps_ratio(text: str) -> float:
    """Share of characters that are uppercase ASCII letters."""
    if not text:
        return 0.0
    return sum(1 for ch in text if "A" <= ch <= "Z") / len(text)


def longest_caps_run(text: str) -> int:
    """Length of the longest run of consecutive ALL-CAPS words (2+ letters)."""
    longest = current = 0
    for word in (text or "").split():
        stripped = word.strip(_TRAILING_PUNCTUATION + "(['\"")
        if len(stripped) >= 2 and stripped.isalpha() and stripped.isupper():
            current += 1
            longest = max(longest, current)
        else:
            current = 0
    return longest


def normalize_text(text: str) -> str:
    """Lowercase and collapse whitespace so trivial edits share a fingerprint."""
    return _WHITESPACE.sub(" ", (text or "").strip().lower())


def stable_text_hash(text: str) -> str:
    """Non-cryptographic 32-bit string hash (multiplier 31) rendered as hex.

    Stable across processes, unlike the builtin ``hash`` for str.
    """
    value = 0
    for ch in normalize_text(text):
        value = (value * 31 + ord(ch)) & 0xFFFFFFFF
    return format(value, "08x")
