"""
DomainRecord - one discovered domain, the canonical shape every channel produces.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .base import ValueModel


class SourceChannel(str, Enum):
    """Where a record was acquired. Never changes after creation."""
    MANUAL = "manual"
    FREE_SCRAPE = "free-scrape"
    VENDOR_CSV = "vendor-csv"


class Tier(str, Enum):
    """Qualitative risk/quality bucket."""
    GOLD = "gold"
    SILVER = "silver"
    BRONZE = "bronze"
    AVOID = "avoid"
    UNSCORED = "unscored"


# Ascending = best first
TIER_RANK: dict[Tier, int] = {
    Tier.GOLD: 0,
    Tier.SILVER: 1,
    Tier.BRONZE: 2,
    Tier.AVOID: 3,
    Tier.UNSCORED: 4,
}


class Recommendation(str, Enum):
    """Buy recommendation derived from the score."""
    STRONG_BUY = "strong-buy"
    BUY = "buy"
    CONSIDER = "consider"
    AVOID = "avoid"


class DomainMetrics(BaseModel):
    """SEO and vendor metrics. Every field is optional."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    # Majestic
    trust_flow: Optional[float] = None
    citation_flow: Optional[float] = None
    backlink_count: Optional[float] = None
    referring_domain_count: Optional[float] = None
    topics: Optional[str] = None

    # Moz
    domain_authority: Optional[float] = None

    # Vendor (SpamZilla)
    vendor_risk_score: Optional[float] = None  # 0-100, lower = cleaner
    prior_drop_count: Optional[float] = None
    active_content_years: Optional[float] = None

    age_years: Optional[float] = None

    # Auction info from vendor exports
    price: Optional[str] = None
    auction_source: Optional[str] = None
    expires: Optional[str] = None

    @property
    def tf_cf_ratio(self) -> float:
        """TrustFlow:CitationFlow ratio, 0 when CF is unknown or zero."""
        if not self.citation_flow or self.trust_flow is None:
            return 0.0
        return self.trust_flow / self.citation_flow

    def merged(self, update: "DomainMetrics") -> "DomainMetrics":
        """Overlay the fields set on `update` (last write wins)."""
        changes = update.model_dump(exclude_none=True)
        return self.model_copy(update=changes)


class DomainScore(BaseModel):
    """Computed score, replaced as a whole on re-scoring."""
    model_config = ConfigDict(frozen=True)

    overall: int = Field(ge=0, le=100)
    tier: Tier = Tier.UNSCORED
    recommendation: Recommendation = Recommendation.AVOID
    estimated_value: float = 0.0


def split_tld(name: str) -> str:
    """Last label of a domain name."""
    parts = name.rsplit(".", 1)
    return parts[1] if len(parts) == 2 else ""


class DomainRecord(ValueModel):
    """
    A discovered domain.

    `name` is the unique key within any collection. Everything except
    `score` is fixed at creation; enrichment and re-scoring go through
    with_metrics()/with_score() which return new records.
    """
    name: str
    tld: str = ""
    source_channel: SourceChannel
    metrics: Optional[DomainMetrics] = None
    enriched: bool = False
    score: Optional[DomainScore] = None
    fetched_at: datetime = Field(default_factory=datetime.now)

    @field_validator("name")
    @classmethod
    def _lowercase_name(cls, value: str) -> str:
        return value.strip().lower()

    @model_validator(mode="before")
    @classmethod
    def _derive_tld(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("tld") and data.get("name"):
            data = {**data, "tld": split_tld(str(data["name"]).strip().lower())}
        return data

    @property
    def label(self) -> str:
        """Name without the TLD."""
        suffix = f".{self.tld}"
        return self.name[: -len(suffix)] if self.tld and self.name.endswith(suffix) else self.name

    @property
    def overall(self) -> int:
        return self.score.overall if self.score else 0

    @property
    def tier(self) -> Tier:
        return self.score.tier if self.score else Tier.UNSCORED

    def with_score(self, score: DomainScore) -> "DomainRecord":
        return self.model_copy(update={"score": score})

    def with_metrics(self, metrics: DomainMetrics, enriched: bool = True) -> "DomainRecord":
        """Attach (merge) vendor metrics. The caller re-scores."""
        merged = self.metrics.merged(metrics) if self.metrics else metrics
        return self.model_copy(update={"metrics": merged, "enriched": enriched or self.enriched})
