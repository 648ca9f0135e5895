"""Scoring constants for the five-factor risk engine.

Factor weights sum to 100 so the default agent set yields a probability on the
same 0-100 scale as each agent's raw score.

Verdict thresholds (checked in order):
1. probability <= 15 and confidence >= 60: CLEAR
2. probability <= 30 and confidence >= 50: LIKELY CLEAR
3. probability <= 50: UNCERTAIN
4. probability <= 70 and confidence >= 50: LIKELY RESTRICTED
5. probability > 70 and confidence >= 60: RESTRICTED
6. anything else: UNCERTAIN
"""

from typing import Dict, List, Tuple

# Factor number -> (display name, default weight)
FACTORS: Dict[int, Tuple[str, int]] = {
    1: ("Platform API Analysis", 20),
    2: ("Web/Search Analysis", 20),
    3: ("Historical Data", 15),
    4: ("Real-Time Detection", 25),
    5: ("Predictive Intelligence", 20),
}

TOTAL_FACTOR_WEIGHT = 100

# Per-token contribution to a signal database risk score
TIER_WEIGHTS: Dict[str, int] = {
    "banned": 30,
    "restricted": 15,
    "monitored": 5,
    "safe": 0,
}

# Ordering used when several entries match the same token
TIER_SEVERITY: Dict[str, int] = {
    "safe": 0,
    "monitored": 1,
    "restricted": 2,
    "banned": 3,
}

MAX_RISK_SCORE = 100

# Finding severity derived from score contribution: (minimum, severity)
SEVERITY_THRESHOLDS: List[Tuple[float, str]] = [
    (75, "critical"),
    (50, "high"),
    (25, "medium"),
]

# (max probability, min confidence, verdict)
VERDICT_RULES: List[Tuple[float, float, str]] = [
    (15, 60, "CLEAR"),
    (30, 50, "LIKELY CLEAR"),
    (50, 0, "UNCERTAIN"),
    (70, 50, "LIKELY RESTRICTED"),
]
RESTRICTED_MIN_CONFIDENCE = 60

VERDICT_DESCRIPTIONS: Dict[str, str] = {
    "CLEAR": "No signs of visibility restriction were found.",
    "LIKELY CLEAR": "Minor signals found; visibility is probably unaffected.",
    "UNCERTAIN": "Signals are mixed or evidence is thin; monitor reach closely.",
    "LIKELY RESTRICTED": "Several risk signals suggest reduced visibility.",
    "RESTRICTED": "Strong evidence of platform visibility restriction.",
}

# Mean raw score of usable agents -> agreement bucket
AGREEMENT_BUCKETS: List[Tuple[float, str]] = [
    (70, "high_risk"),
    (50, "medium_risk"),
    (25, "low_risk"),
]

MAX_PRIMARY_ISSUES = 5

# Probability above which a generic review recommendation is raised
REVIEW_PROBABILITY_THRESHOLD = 60

# Relative weight of each detection type inside the Real-Time Detection agent
DETECTION_TYPE_WEIGHTS: Dict[str, int] = {
    "hashtags": 25,
    "cashtags": 15,
    "links": 25,
    "content": 20,
    "mentions": 10,
    "emojis": 5,
}

# Tag check verdicts keyed by tier
TAG_VERDICTS: Dict[str, str] = {
    "banned": "AVOID",
    "restricted": "CAUTION",
    "monitored": "WATCH",
    "safe": "SAFE",
}
