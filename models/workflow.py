"""
Acquisition workflow values: candidate -> queued -> owned.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import Field, field_validator, model_validator

from .base import ValueModel
from .domain import DomainRecord
from .profile import DomainProfile


class WorkflowStage(str, Enum):
    CANDIDATE = "candidate"
    QUEUED = "queued"
    OWNED = "owned"


class ProfileStatus(str, Enum):
    PENDING = "pending"
    GENERATING = "generating"
    SUCCESS = "success"
    FAILED = "failed"


# Allowed profile status changes. failed -> generating is the only re-entry.
PROFILE_TRANSITIONS: dict[ProfileStatus, set[ProfileStatus]] = {
    ProfileStatus.PENDING: {ProfileStatus.GENERATING},
    ProfileStatus.GENERATING: {ProfileStatus.SUCCESS, ProfileStatus.FAILED},
    ProfileStatus.FAILED: {ProfileStatus.GENERATING},
    ProfileStatus.SUCCESS: set(),
}


class InvalidTransition(ValueError):
    """Raised when a profile status change is not allowed."""


class WorkflowRecord(ValueModel):
    """A domain sitting in the candidate or queued collection."""
    record: DomainRecord
    stage: WorkflowStage
    added_at: datetime = Field(default_factory=datetime.now)

    @property
    def name(self) -> str:
        return self.record.name


class OwnedDomain(WorkflowRecord):
    """
    A purchased domain plus its profile-generation lifecycle.

    Invariants:
    - profile is present only when profile_status is success
    - profile_error is present only when profile_status is failed
    - site_created never goes back to False
    """
    stage: WorkflowStage = WorkflowStage.OWNED
    purchased_at: datetime = Field(default_factory=datetime.now)
    profile_status: ProfileStatus = ProfileStatus.PENDING
    profile: Optional[DomainProfile] = None
    profile_error: Optional[str] = None
    site_created: bool = False

    @field_validator("stage")
    @classmethod
    def _always_owned(cls, value: WorkflowStage) -> WorkflowStage:
        if value != WorkflowStage.OWNED:
            raise ValueError("owned domains are always in the owned stage")
        return value

    @model_validator(mode="after")
    def _check_profile_fields(self) -> "OwnedDomain":
        if self.profile is not None and self.profile_status != ProfileStatus.SUCCESS:
            raise ValueError("profile is only set when profile_status is success")
        if self.profile_error is not None and self.profile_status != ProfileStatus.FAILED:
            raise ValueError("profile_error is only set when profile_status is failed")
        return self

    def _transition(self, status: ProfileStatus, **changes) -> "OwnedDomain":
        if status not in PROFILE_TRANSITIONS[self.profile_status]:
            raise InvalidTransition(
                f"{self.name}: profile {self.profile_status.value} -> {status.value} not allowed"
            )
        return self.model_copy(update={"profile_status": status, **changes})

    def begin_generation(self) -> "OwnedDomain":
        return self._transition(ProfileStatus.GENERATING, profile=None, profile_error=None)

    def complete_generation(self, profile: DomainProfile) -> "OwnedDomain":
        return self._transition(ProfileStatus.SUCCESS, profile=profile, profile_error=None)

    def fail_generation(self, error: str) -> "OwnedDomain":
        return self._transition(ProfileStatus.FAILED, profile=None, profile_error=error)

    def mark_site_created(self) -> "OwnedDomain":
        if self.site_created:
            return self
        return self.model_copy(update={"site_created": True})

    @property
    def can_retry(self) -> bool:
        return ProfileStatus.GENERATING in PROFILE_TRANSITIONS[self.profile_status]


class WatchlistEntry(ValueModel):
    """A record the user bookmarked, with optional notes."""
    record: DomainRecord
    added_at: datetime = Field(default_factory=datetime.now)
    notes: Optional[str] = None

    @property
    def name(self) -> str:
        return self.record.name

    def with_notes(self, notes: Optional[str]) -> "WatchlistEntry":
        return self.model_copy(update={"notes": notes or None})
