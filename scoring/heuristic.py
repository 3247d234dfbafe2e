"""
Name-only scoring for records without vendor metrics.

Coarse by design: the result carries an overall score and a recommendation
but the tier stays `unscored`.
"""

import re

from models import DomainScore, Tier, Recommendation
from .vendor import estimate_value, round_half_up

PREMIUM_TLDS = {"com", "net", "org", "io", "ai", "co"}
GOOD_TLDS = {"info", "biz", "dev", "app", "tech", "guide", "review"}

SPAM_PATTERNS = [
    re.compile(p)
    for p in (
        r"casino", r"poker", r"gambling", r"bet365", r"slots",
        r"viagra", r"cialis", r"pharma", r"pills",
        r"xxx", r"porn", r"adult", r"sex",
        r"payday", r"loan.*fast", r"cheap.*buy", r"buy.*cheap",
    )
]

# Component weights for the composite (sum to 1.0)
WEIGHTS = {
    "authority": 0.30,
    "trust": 0.20,
    "relevance": 0.15,
    "name_quality": 0.15,
    "email_potential": 0.10,
    "flip_potential": 0.10,
}

# Without metrics authority is near-floor and trust/relevance are neutral
NO_DATA_AUTHORITY = 10
NEUTRAL = 50

RECOMMENDATION_THRESHOLDS = [
    (75, Recommendation.STRONG_BUY),
    (55, Recommendation.BUY),
    (35, Recommendation.CONSIDER),
]


def is_spam(name: str) -> bool:
    return any(p.search(name) for p in SPAM_PATTERNS)


def name_quality(label: str, tld: str) -> int:
    """0-100 from label length, TLD, digits and hyphens."""
    score = 50
    length = len(label)
    if length <= 6:
        score += 20
    elif length <= 10:
        score += 15
    elif length <= 15:
        score += 5
    elif length > 20:
        score -= 15

    if tld in PREMIUM_TLDS:
        score += 20
    elif tld in GOOD_TLDS:
        score += 10
    else:
        score -= 10

    score += -10 if any(c.isdigit() for c in label) else 5
    score += -15 if "-" in label else 5
    return max(0, min(100, score))


def _email_potential(tld: str) -> int:
    return NEUTRAL + (15 if tld in PREMIUM_TLDS else 0)


def _flip_potential(label: str, tld: str, quality: int) -> int:
    score = NO_DATA_AUTHORITY * 0.4 + quality * 0.4
    if len(label) <= 8:
        score += 15
    elif len(label) <= 12:
        score += 5
    if tld == "com":
        score += 10
    return min(100, round_half_up(score))


def recommend(overall: int) -> Recommendation:
    for threshold, recommendation in RECOMMENDATION_THRESHOLDS:
        if overall >= threshold:
            return recommendation
    return Recommendation.AVOID


def score_name(name: str, label: str, tld: str) -> DomainScore:
    if is_spam(name):
        return DomainScore(
            overall=0,
            tier=Tier.UNSCORED,
            recommendation=Recommendation.AVOID,
            estimated_value=0.0,
        )

    quality = name_quality(label, tld)
    components = {
        "authority": NO_DATA_AUTHORITY,
        "trust": NEUTRAL,
        "relevance": NEUTRAL,
        "name_quality": quality,
        "email_potential": _email_potential(tld),
        "flip_potential": _flip_potential(label, tld, quality),
    }
    overall = round_half_up(sum(components[k] * w for k, w in WEIGHTS.items()))
    overall = max(0, min(100, overall))
    return DomainScore(
        overall=overall,
        tier=Tier.UNSCORED,
        recommendation=recommend(overall),
        estimated_value=estimate_value(Tier.UNSCORED, None, tld),
    )
