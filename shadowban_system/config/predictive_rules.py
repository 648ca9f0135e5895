"""Rule tables for the Predictive Intelligence factor.

All rules are static and deterministic; the only time-dependent input is the
clock injected into the predictive agent.
"""

from typing import Dict, List, Optional, Tuple

# (name, months, (first day, last day) or None, risk multiplier)
HIGH_RISK_PERIODS: List[Tuple[str, Tuple[int, ...], Optional[Tuple[int, int]], float]] = [
    ("US Elections", (10, 11), None, 1.5),
    ("Major Holidays", (12, 1), None, 1.2),
    ("Black Friday/Cyber Monday", (11,), (20, 30), 1.3),
    ("Super Bowl", (2,), (1, 15), 1.2),
]

# Temporal risk = round(TEMPORAL_BASE * (multiplier - 1) * 2)
TEMPORAL_BASE = 20

# (regex, risk level, category)
SENSITIVE_TOPICS: List[Tuple[str, str, str]] = [
    (r"election|vote|ballot|poll|voting", "high", "political"),
    (r"covid|vaccine|pandemic|virus|mask mandate", "high", "health"),
    (r"crypto|bitcoin|nft|token|coin|defi", "medium", "financial"),
    (r"\bwar\b|invasion|conflict|military|troops", "high", "geopolitical"),
    (r"protest|riot|demonstration|march", "medium", "civil"),
    (r"breaking|leaked|exposed|scandal", "medium", "news"),
    (r"giveaway|free|winner|claim|prize", "medium", "spam"),
    (r"conspiracy|hoax|fake news", "high", "misinformation"),
]

TOPIC_RISK: Dict[str, int] = {"high": 40, "medium": 20, "low": 10}

# Filters each platform is known to run; any word of a filter matching counts
PLATFORM_FILTERS: Dict[str, List[str]] = {
    "twitter": ["election misinformation", "health misinformation", "spam", "coordinated behavior"],
    "reddit": ["brigading", "spam", "ban evasion", "vote manipulation"],
    "instagram": ["engagement bait", "banned hashtags", "adult content", "automation"],
    "tiktok": ["dangerous acts", "political content", "adult content", "copyrighted audio"],
    "facebook": ["misinformation", "clickbait", "engagement bait", "fake engagement"],
    "youtube": ["misleading content", "community guidelines", "spam", "scams"],
    "linkedin": ["engagement bait", "spam", "automation", "irrelevant content"],
}

PLATFORM_FILTER_RISK = 15
PLATFORM_FILTER_CAP = 50

# (code, regex, risk, message)
SPAM_PATTERNS: List[Tuple[str, str, int, str]] = [
    ("promotional_spam", r"(?:free|win|giveaway).*(?:click|link|dm)", 30,
     "Content matches common spam patterns"),
    ("engagement_bait", r"(?:like|share|comment|follow).*(?:if you|to win|for a chance)", 25,
     "Content appears to be engagement bait"),
    ("urgency", r"(?:act now|limited time|hurry|last chance|don't miss)", 15,
     "Content uses urgency tactics common in spam"),
    ("excessive_punctuation", r"[!?]{3,}", 5,
     "Excessive punctuation may reduce reach"),
]

CAPS_PATTERN_RISK = 10
CAPS_PATTERN_RATIO = 0.5
CAPS_PATTERN_MIN_LENGTH = 20

# platform -> [(code, regex, risk, message)]
KNOWN_ISSUES: Dict[str, List[Tuple[str, str, int, str]]] = {
    "twitter": [
        ("shortened_urls", r"bit\.ly|tinyurl|t\.co", 20,
         "URL shorteners may trigger spam detection"),
        ("follow_for_follow", r"(follow|like|rt).*4.*(follow|like|rt)", 35,
         "Follow-for-follow language is actively suppressed"),
    ],
    "reddit": [
        ("self_promotion", r"my (?:channel|blog|site|store|shop)|check out my|subscribe to", 25,
         "Self-promotion is frequently removed by subreddit filters"),
    ],
    "instagram": [
        ("link_in_bio", r"link in (?:my )?bio", 15,
         "Link-in-bio calls to action are down-ranked"),
    ],
    "tiktok": [
        ("link_in_bio", r"link in (?:my )?bio", 15,
         "Link-in-bio calls to action are down-ranked"),
    ],
}

# LinkedIn down-ranks posts carrying more hashtags than this
LINKEDIN_HASHTAG_LIMIT = 3
LINKEDIN_HASHTAG_RISK = 20

# Weighted blend of the predictive components
COMPONENT_WEIGHTS: Dict[str, float] = {
    "temporal": 0.3,
    "topic": 0.4,
    "platform": 0.3,
    "pattern": 0.2,
    "known_issues": 0.2,
}

BASE_CONFIDENCE = 50
KNOWN_PLATFORM_CONFIDENCE = 10
COMPONENT_CONFIDENCE = 5
MIN_CONFIDENCE = 30
MAX_CONFIDENCE = 95
