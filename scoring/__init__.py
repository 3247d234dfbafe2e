"""
Scoring engine - overall score, tier, recommendation and estimated value.
"""

from .engine import (
    score,
    rescore,
    score_input,
    to_score_input,
    has_vendor_metrics,
    HeuristicInput,
    VendorInput,
    ScoreInput,
)
from .vendor import weighted_sum, assign_tier, estimate_value, TIER_BANDS
from .heuristic import name_quality, is_spam

__all__ = [
    "score",
    "rescore",
    "score_input",
    "to_score_input",
    "has_vendor_metrics",
    "HeuristicInput",
    "VendorInput",
    "ScoreInput",
    "weighted_sum",
    "assign_tier",
    "estimate_value",
    "TIER_BANDS",
    "name_quality",
    "is_spam",
]
