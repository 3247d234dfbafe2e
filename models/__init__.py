"""
Domain models - single source of truth for all values.

Design principles:
- Every value defined once
- Records are immutable, changes produce copies
- Validation at the boundary
- Backend-agnostic (repository handles persistence)
"""

from .base import ValueModel
from .domain import (
    DomainRecord,
    DomainMetrics,
    DomainScore,
    SourceChannel,
    Tier,
    TIER_RANK,
    Recommendation,
    split_tld,
)
from .workflow import (
    WorkflowStage,
    WorkflowRecord,
    OwnedDomain,
    ProfileStatus,
    PROFILE_TRANSITIONS,
    InvalidTransition,
    WatchlistEntry,
)
from .profile import DomainProfile, GenerationResult
from .sources import (
    NormalizeResult,
    ImportStats,
    ScrapeResult,
    ActionRequired,
    ActionType,
    EnrichmentResult,
)
from .worker import WorkerStats

__all__ = [
    # Base
    "ValueModel",
    # Domain
    "DomainRecord",
    "DomainMetrics",
    "DomainScore",
    "SourceChannel",
    "Tier",
    "TIER_RANK",
    "Recommendation",
    "split_tld",
    # Workflow
    "WorkflowStage",
    "WorkflowRecord",
    "OwnedDomain",
    "ProfileStatus",
    "PROFILE_TRANSITIONS",
    "InvalidTransition",
    "WatchlistEntry",
    # Profile
    "DomainProfile",
    "GenerationResult",
    # Sources
    "NormalizeResult",
    "ImportStats",
    "ScrapeResult",
    "ActionRequired",
    "ActionType",
    "EnrichmentResult",
    # Worker
    "WorkerStats",
]
