"""
SpamZilla CSV export parser.

Detection is by header: the export must carry both a trust-flow column and
the vendor risk score column. Column order is free, lookup is by name.
"""

import csv
import io
import math
from typing import Optional

from models import DomainMetrics, DomainRecord, ImportStats, NormalizeResult, SourceChannel, Tier
from .normalizer import clean_domain

REQUIRED_COLUMNS = ("tf", "sz score")
MIN_ROW_VALUES = 5

# DomainMetrics field -> header names (lower-cased), first match wins
NUMERIC_COLUMNS: dict[str, tuple[str, ...]] = {
    "trust_flow": ("tf",),
    "citation_flow": ("cf",),
    "backlink_count": ("majestic bl",),
    "referring_domain_count": ("majestic rd",),
    "domain_authority": ("moz da",),
    "age_years": ("age",),
    "vendor_risk_score": ("sz score",),
    "prior_drop_count": ("sz drops",),
    "active_content_years": ("sz active history", "sz a/history"),
}
TEXT_COLUMNS: dict[str, tuple[str, ...]] = {
    "topics": ("majestic topics",),
    "price": ("price",),
    "expires": ("expires",),
    "auction_source": ("source",),
}

# Export presets guessed from the file name (after _ and spaces become -)
PRESETS: dict[str, tuple[str, ...]] = {
    "gold": ("gold",),
    "safe-relax": ("safe-relax", "safetorelax", "safe-to-relax", "relaxed"),
    "max-volume": ("max-volume", "maximumvolume", "maximum-volume", "max-vol"),
}

# AdSense readiness thresholds
ADSENSE_MAX_RISK = 20
ADSENSE_MIN_TRUST_FLOW = 8
ADSENSE_MIN_DOMAIN_AUTHORITY = 10
ADSENSE_MIN_RATIO = 0.3


def _header(text: str) -> list[str]:
    first_line = (text or "").lstrip("\ufeff").split("\n", 1)[0]
    row = next(csv.reader([first_line]), [])
    return [h.strip().lower() for h in row]


def is_vendor_export(text: str) -> bool:
    header = _header(text)
    return all(col in header for col in REQUIRED_COLUMNS)


def detect_preset(filename: Optional[str]) -> str:
    """
    'SZ-gold-2024.csv' -> 'gold'. Unknown names are 'custom'.
    """
    name = (filename or "").lower().replace("_", "-").replace(" ", "-")
    for preset, spellings in PRESETS.items():
        if any(s in name for s in spellings):
            return preset
    return "custom"


def parse_number(value: Optional[str]) -> float:
    """Vendor numbers, '1,234' style allowed. Blank or junk is 0."""
    if value is None:
        return 0.0
    cleaned = value.strip().replace(",", "").replace("$", "")
    if not cleaned:
        return 0.0
    try:
        number = float(cleaned)
    except ValueError:
        return 0.0
    return number if math.isfinite(number) else 0.0


def _lookup(row: dict, names: tuple[str, ...]) -> Optional[str]:
    for name in names:
        if name in row:
            return row[name]
    return None


def _metrics_from_row(row: dict) -> DomainMetrics:
    values = {}
    for field, names in NUMERIC_COLUMNS.items():
        raw = _lookup(row, names)
        if raw is not None:
            values[field] = parse_number(raw)
    for field, names in TEXT_COLUMNS.items():
        raw = _lookup(row, names)
        if raw and raw.strip():
            values[field] = raw.strip()
    return DomainMetrics(**values)


def is_adsense_ready(record: DomainRecord) -> bool:
    m = record.metrics
    if not m or not record.score or record.score.tier == Tier.AVOID:
        return False
    return (
        (m.vendor_risk_score or 0) <= ADSENSE_MAX_RISK
        and (m.trust_flow or 0) >= ADSENSE_MIN_TRUST_FLOW
        and (m.domain_authority or 0) >= ADSENSE_MIN_DOMAIN_AUTHORITY
        and m.tf_cf_ratio >= ADSENSE_MIN_RATIO
    )


def import_stats(records: list[DomainRecord]) -> ImportStats:
    """Summary numbers for a scored import."""
    if not records:
        return ImportStats()

    def avg(field: str) -> float:
        values = [getattr(r.metrics, field) or 0 for r in records if r.metrics]
        return round(sum(values) / len(records), 1)

    return ImportStats(
        total=len(records),
        adsense_ready=sum(1 for r in records if is_adsense_ready(r)),
        avg_trust_flow=avg("trust_flow"),
        avg_risk_score=avg("vendor_risk_score"),
        avg_domain_authority=avg("domain_authority"),
    )


def parse_vendor_csv(text: str, filename: str = None) -> NormalizeResult:
    """
    Parse a SpamZilla export into vendor-csv records.

    Rows with fewer than MIN_ROW_VALUES cells or no valid domain in the Name
    column are dropped. The returned records are unscored; stats are filled
    from a scored copy so adsense readiness can use tiers.
    """
    from scoring import rescore

    reader = csv.reader(io.StringIO((text or "").lstrip("\ufeff")))
    header = [h.strip().lower() for h in next(reader, [])]

    records: list[DomainRecord] = []
    seen: set[str] = set()
    dropped = 0
    duplicates = 0

    for cells in reader:
        if not any(c.strip() for c in cells):
            continue
        if len(cells) < MIN_ROW_VALUES:
            dropped += 1
            continue
        row = {col: cells[i] for i, col in enumerate(header) if i < len(cells)}
        name = clean_domain(row.get("name", cells[0]))
        if not name:
            dropped += 1
            continue
        if name in seen:
            duplicates += 1
            continue
        seen.add(name)
        records.append(DomainRecord(
            name=name,
            source_channel=SourceChannel.VENDOR_CSV,
            metrics=_metrics_from_row(row),
        ))

    return NormalizeResult(
        records=records,
        dropped=dropped,
        duplicates=duplicates,
        vendor_format=True,
        preset=detect_preset(filename),
        stats=import_stats([rescore(r) for r in records]),
    )
