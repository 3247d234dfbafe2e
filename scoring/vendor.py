"""
Vendor-metric scoring: weighted sum, tier bands, estimated value.

All functions are pure. Missing metrics contribute zero.
"""

import math
from typing import Optional

from models import DomainMetrics, DomainScore, Tier, Recommendation

# Weighted sum (max 100)
TRUST_FLOW_RATE = 1.5
TRUST_FLOW_MAX = 30
DOMAIN_AUTHORITY_RATE = 0.5
DOMAIN_AUTHORITY_MAX = 25
RISK_MAX = 25  # Awarded as RISK_MAX - risk score, floor 0
RATIO_MAX = 10  # ratio capped at 1.0
AGE_RATE = 0.5
AGE_MAX = 10

# (tier, min overall, max vendor risk) - checked best first
TIER_BANDS: list[tuple[Tier, int, float]] = [
    (Tier.GOLD, 70, 10),
    (Tier.SILVER, 55, 15),
    (Tier.BRONZE, 40, 20),
]

RECOMMENDATION_BY_TIER: dict[Tier, Recommendation] = {
    Tier.GOLD: Recommendation.STRONG_BUY,
    Tier.SILVER: Recommendation.BUY,
    Tier.BRONZE: Recommendation.CONSIDER,
    Tier.AVOID: Recommendation.AVOID,
}

# Estimated value model
BASE_VALUE = 50
TIER_BONUS: dict[Tier, int] = {
    Tier.GOLD: 200,
    Tier.SILVER: 100,
    Tier.BRONZE: 50,
}
TRUST_FLOW_VALUE = 5
DOMAIN_AUTHORITY_VALUE = 3
COM_MULTIPLIER = 1.5


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _finite(value: Optional[float]) -> float:
    """None, NaN and infinities count as 0."""
    if value is None or not math.isfinite(value):
        return 0.0
    return value


def _capped(value: Optional[float], rate: float, cap: float) -> float:
    return max(0.0, min(cap, _finite(value) * rate))


def weighted_sum(metrics: DomainMetrics) -> int:
    """Overall score from vendor metrics, rounded and clamped to [0, 100]."""
    total = (
        _capped(metrics.trust_flow, TRUST_FLOW_RATE, TRUST_FLOW_MAX)
        + _capped(metrics.domain_authority, DOMAIN_AUTHORITY_RATE, DOMAIN_AUTHORITY_MAX)
        + _capped(min(metrics.tf_cf_ratio, 1.0), RATIO_MAX, RATIO_MAX)
        + _capped(metrics.age_years, AGE_RATE, AGE_MAX)
    )
    risk = metrics.vendor_risk_score
    if risk is not None and math.isfinite(risk):
        total += max(0.0, min(RISK_MAX, RISK_MAX - risk))
    return max(0, min(100, round_half_up(total)))


def assign_tier(overall: int, risk_score: Optional[float]) -> Tier:
    """
    Tier from overall score and vendor risk.

    Monotonic: raising overall or lowering risk never gives a worse tier.
    Unknown or non-finite risk can't pass any band.
    """
    if risk_score is None or not math.isfinite(risk_score):
        return Tier.AVOID
    for tier, min_overall, max_risk in TIER_BANDS:
        if overall >= min_overall and risk_score <= max_risk:
            return tier
    return Tier.AVOID


def estimate_value(tier: Tier, metrics: Optional[DomainMetrics], tld: str) -> float:
    """Rough resale value in USD."""
    value = BASE_VALUE + TIER_BONUS.get(tier, 0)
    if metrics:
        value += _finite(metrics.trust_flow) * TRUST_FLOW_VALUE
        value += _finite(metrics.domain_authority) * DOMAIN_AUTHORITY_VALUE
    if tld == "com":
        value *= COM_MULTIPLIER
    return float(round_half_up(value))


def score_metrics(metrics: DomainMetrics, tld: str) -> DomainScore:
    overall = weighted_sum(metrics)
    tier = assign_tier(overall, metrics.vendor_risk_score)
    return DomainScore(
        overall=overall,
        tier=tier,
        recommendation=RECOMMENDATION_BY_TIER[tier],
        estimated_value=estimate_value(tier, metrics, tld),
    )
