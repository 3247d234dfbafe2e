"""
Source channels - manual paste, vendor CSV, free scrape, vendor enrichment.

Everything here produces DomainRecords (or metrics for them). Nothing here
touches persisted state.
"""

from .normalizer import (
    clean_domain,
    normalize_manual,
    normalize_scraped,
    normalize_import,
    DOMAIN_PATTERN,
)
from .vendor_csv import (
    is_vendor_export,
    parse_vendor_csv,
    detect_preset,
    import_stats,
    is_adsense_ready,
)
from .free_scrape import FreeScrapeClient, extract_domains, parse_keywords
from .enrichment import SpamZillaClient, EnrichmentError, metrics_from_payload

__all__ = [
    "clean_domain",
    "normalize_manual",
    "normalize_scraped",
    "normalize_import",
    "DOMAIN_PATTERN",
    "is_vendor_export",
    "parse_vendor_csv",
    "detect_preset",
    "import_stats",
    "is_adsense_ready",
    "FreeScrapeClient",
    "extract_domains",
    "parse_keywords",
    "SpamZillaClient",
    "EnrichmentError",
    "metrics_from_payload",
]
