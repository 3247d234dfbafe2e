"""
Profile generators.

ProfileGenerator is the collaborator interface the workflow depends on:
    generate(domain, metrics) -> GenerationResult

LLMProfileGenerator asks a chat model (via config.get_client) for a JSON
profile and parses the first JSON object out of the reply.
"""

import json
from abc import ABC, abstractmethod
from typing import Optional

from config import get_client, get_default_model, PROFILE_PROMPT
from models import DomainMetrics, DomainProfile, GenerationResult, split_tld
from .segmentation import segment_domain

# Reply key -> DomainProfile field
LIST_FIELDS = {
    "primaryKeywords": "primary_keywords",
    "secondaryKeywords": "secondary_keywords",
    "questionKeywords": "question_keywords",
    "suggestedTopics": "suggested_topics",
    "suggestedCategories": "suggested_categories",
    "contentAngles": "content_angles",
    "monetizationHints": "monetization_hints",
}


class ProfileGenerator(ABC):
    """Produces a DomainProfile for an owned domain."""

    @abstractmethod
    async def generate(self, domain: str, metrics: Optional[DomainMetrics] = None) -> GenerationResult:
        pass


def _fmt(value, suffix: str = "") -> str:
    if value is None:
        return "unknown"
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return f"{value}{suffix}"


def build_prompt(domain: str, metrics: Optional[DomainMetrics] = None) -> str:
    words = segment_domain(domain)
    m = metrics or DomainMetrics()
    return PROFILE_PROMPT.format(
        domain=domain,
        words=", ".join(words) or domain,
        tld=split_tld(domain) or "unknown",
        topics=m.topics or "unknown",
        age=_fmt(m.age_years, " years"),
        domain_authority=_fmt(m.domain_authority),
        trust_flow=_fmt(m.trust_flow),
    )


def extract_json_object(text: str) -> Optional[dict]:
    """First {...} block in a model reply, or None."""
    if not text:
        return None
    start = text.find("{")
    end = text.rfind("}")
    if start < 0 or end <= start:
        return None
    try:
        data = json.loads(text[start:end + 1])
    except json.JSONDecodeError:
        return None
    return data if isinstance(data, dict) else None


def _string_list(value) -> list[str]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        return []
    return [str(v).strip() for v in value if str(v).strip()]


def parse_profile_response(domain: str, text: str, generated_by: str = "") -> GenerationResult:
    """Turn a raw model reply into a GenerationResult."""
    data = extract_json_object(text)
    if data is None:
        return GenerationResult.failure("Model response contained no JSON object")
    if data.get("error"):
        return GenerationResult.failure(str(data["error"]))

    niche = str(data.get("niche") or "").strip()
    if not niche:
        return GenerationResult.failure("Model response has no niche")

    profile = DomainProfile(
        domain=domain,
        niche=niche,
        niche_description=str(data.get("nicheDescription") or "").strip(),
        domain_words=segment_domain(domain),
        generated_by=generated_by,
        **{field: _string_list(data.get(key)) for key, field in LIST_FIELDS.items()},
    )
    return GenerationResult.ok(profile)


class LLMProfileGenerator(ProfileGenerator):
    """Profile generation through an OpenAI-compatible chat model."""

    def __init__(self, model_key: str = None, max_tokens: int = 1500):
        self.model_key = model_key or get_default_model()
        self.max_tokens = max_tokens

    async def generate(self, domain: str, metrics: Optional[DomainMetrics] = None) -> GenerationResult:
        client, cfg = get_client(self.model_key)
        model_name = cfg.get("model", self.model_key.split("/")[-1])

        resp = await client.chat.completions.create(
            model=model_name,
            messages=[
                {"role": "system", "content": "You plan content sites. Reply with JSON only."},
                {"role": "user", "content": build_prompt(domain, metrics)},
            ],
            temperature=cfg.get("temperature", 0.7),
            max_tokens=self.max_tokens,
        )
        text = resp.choices[0].message.content or ""
        return parse_profile_response(domain, text, generated_by=self.model_key)
