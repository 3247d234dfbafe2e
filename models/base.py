"""
Base model classes.
"""

from pydantic import BaseModel, ConfigDict


class ValueModel(BaseModel):
    """
    Base for all persisted domain values.

    Values are immutable. State changes produce a new instance via
    model_copy(update=...), and the owning store swaps it in.
    """
    model_config = ConfigDict(
        frozen=True,
        extra="ignore",  # Ignore unknown fields from older state files
        str_strip_whitespace=True,
    )
