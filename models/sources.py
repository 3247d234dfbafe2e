"""
Results returned by the source channels (paste, vendor CSV, free scrape, enrichment).
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

from .domain import DomainRecord, DomainMetrics


class ImportStats(BaseModel):
    """Summary of a vendor CSV import."""
    total: int = 0
    adsense_ready: int = 0
    avg_trust_flow: float = 0.0
    avg_risk_score: float = 0.0
    avg_domain_authority: float = 0.0


class NormalizeResult(BaseModel):
    """Records produced from one raw payload plus what was dropped on the way."""
    records: list[DomainRecord] = Field(default_factory=list)
    dropped: int = 0  # Rows/lines with no valid domain
    duplicates: int = 0  # Repeats inside the same payload
    vendor_format: bool = False
    preset: Optional[str] = None  # Vendor export preset guessed from the file name
    stats: Optional[ImportStats] = None


class ActionType(str, Enum):
    CAPTCHA = "captcha"
    RATE_LIMIT = "rate_limit"
    BLOCKED = "blocked"
    NETWORK = "network"


class ActionRequired(BaseModel):
    """Tells the user what to do when a channel can't be reached automatically."""
    type: ActionType
    message: str
    action: str
    url: Optional[str] = None


class ScrapeResult(BaseModel):
    """Outcome of a free-scrape fetch. A failure is a value, not an exception."""
    success: bool
    records: list[DomainRecord] = Field(default_factory=list)
    dropped: int = 0
    error: Optional[str] = None
    action_required: Optional[ActionRequired] = None
    source: str = ""


class EnrichmentResult(BaseModel):
    """Per-domain vendor metrics plus the names that could not be enriched."""
    metrics: dict[str, DomainMetrics] = Field(default_factory=dict)
    failed: dict[str, str] = Field(default_factory=dict)  # name -> error
