"""
Profile generation - niche, keywords and topic plan for an owned domain.
"""

from .generator import (
    ProfileGenerator,
    LLMProfileGenerator,
    build_prompt,
    extract_json_object,
    parse_profile_response,
)
from .segmentation import segment, segment_domain
from .export import export_profile

__all__ = [
    "ProfileGenerator",
    "LLMProfileGenerator",
    "build_prompt",
    "extract_json_object",
    "parse_profile_response",
    "segment",
    "segment_domain",
    "export_profile",
]
