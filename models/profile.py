"""
Generated content/marketing profile for an owned domain.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict


class DomainProfile(BaseModel):
    """Niche, keyword lists and topic suggestions produced by the LLM."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    domain: str
    niche: str
    niche_description: str = ""
    primary_keywords: list[str] = Field(default_factory=list)
    secondary_keywords: list[str] = Field(default_factory=list)
    question_keywords: list[str] = Field(default_factory=list)
    suggested_topics: list[str] = Field(default_factory=list)
    suggested_categories: list[str] = Field(default_factory=list)
    content_angles: list[str] = Field(default_factory=list)
    monetization_hints: list[str] = Field(default_factory=list)
    domain_words: list[str] = Field(default_factory=list)  # Segmented from the name

    generated_by: str = ""  # provider/model
    generated_at: datetime = Field(default_factory=datetime.now)


class GenerationResult(BaseModel):
    """Outcome of one profile-generation call."""
    success: bool
    profile: Optional[DomainProfile] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, profile: DomainProfile) -> "GenerationResult":
        return cls(success=True, profile=profile)

    @classmethod
    def failure(cls, error: str) -> "GenerationResult":
        return cls(success=False, error=error or "Profile generation failed")
