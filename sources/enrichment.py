"""
Vendor enrichment - SpamZilla per-domain metrics lookup.
"""

import asyncio
import math
from typing import Iterable, Optional

import requests

from config import SPAMZILLA_API_URL, ENRICH_TIMEOUT, get_spamzilla_api_key
from models import DomainMetrics, EnrichmentResult

# DomainMetrics field -> accepted response keys
FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "trust_flow": ("tf", "trust_flow"),
    "citation_flow": ("cf", "citation_flow"),
    "domain_authority": ("da", "domain_authority"),
    "backlink_count": ("bl", "backlinks"),
    "referring_domain_count": ("rd", "referring_domains"),
    "age_years": ("age", "domain_age"),
    "vendor_risk_score": ("sz_score", "spam_score"),
    "prior_drop_count": ("drops", "sz_drops"),
    "active_content_years": ("active_history", "sz_active_history"),
}


class EnrichmentError(Exception):
    """One domain could not be enriched."""


def _as_float(value) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def metrics_from_payload(data: dict) -> DomainMetrics:
    """Map a vendor response body onto DomainMetrics. Unknown keys are ignored."""
    values = {}
    for field, keys in FIELD_ALIASES.items():
        for key in keys:
            number = _as_float(data.get(key))
            if number is not None:
                values[field] = number
                break
    topics = data.get("topics")
    if isinstance(topics, list):
        topics = ", ".join(str(t) for t in topics)
    if topics:
        values["topics"] = str(topics)
    return DomainMetrics(**values)


class SpamZillaClient:
    """Bearer-token client for the SpamZilla domain endpoint."""

    name = "enrich"

    def __init__(
        self,
        api_key: str = None,
        base_url: str = SPAMZILLA_API_URL,
        timeout: float = ENRICH_TIMEOUT,
        session: requests.Session = None,
    ):
        self.api_key = api_key if api_key is not None else get_spamzilla_api_key()
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def fetch_one(self, domain: str) -> DomainMetrics:
        """Metrics for one domain. Raises EnrichmentError."""
        try:
            r = self.session.get(
                f"{self.base_url}/domain/{domain}",
                headers={"Authorization": f"Bearer {self.api_key}", "Accept": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise EnrichmentError(f"Network error: {e}") from e

        if r.status_code == 401:
            raise EnrichmentError("Invalid API key")
        if r.status_code == 429:
            raise EnrichmentError("Rate limited")
        if r.status_code >= 400:
            raise EnrichmentError(f"HTTP {r.status_code}")

        try:
            body = r.json()
        except ValueError as e:
            raise EnrichmentError("Malformed response") from e

        if not isinstance(body, dict) or body.get("success") is False:
            message = body.get("error") if isinstance(body, dict) else None
            raise EnrichmentError(message or "Lookup failed")

        data = body.get("data", body)
        if not isinstance(data, dict):
            raise EnrichmentError("Malformed response")
        return metrics_from_payload(data)

    def enrich(self, names: Iterable[str]) -> EnrichmentResult:
        """Look up each name. Failures are collected, not raised."""
        result = EnrichmentResult()
        if not self.configured:
            for name in names:
                result.failed[name] = "SpamZilla API key not configured"
            return result

        for name in names:
            try:
                result.metrics[name] = self.fetch_one(name)
            except EnrichmentError as e:
                print(f"[{self.name}] {name}: {e}")
                result.failed[name] = str(e)

        print(f"[{self.name}] Enriched {len(result.metrics)}, failed {len(result.failed)}")
        return result

    async def enrich_async(self, names: Iterable[str]) -> EnrichmentResult:
        return await asyncio.to_thread(self.enrich, list(names))
