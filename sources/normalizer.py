"""
Source normalizer - raw channel payloads to DomainRecords.

Pure functions. Invalid lines are dropped and counted, never raised.
"""

import re
from typing import Iterable, Optional

from models import DomainRecord, NormalizeResult, SourceChannel

# label chars + dot + 2-63 letter TLD
DOMAIN_PATTERN = re.compile(
    r"^(?=.{4,253}$)(?:[a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?\.)+[a-z]{2,63}$"
)
SCHEME_PATTERN = re.compile(r"^[a-z][a-z0-9+.-]*://")
TOKEN_SEPARATORS = re.compile(r"[,;\s]+")


def clean_domain(raw: str) -> Optional[str]:
    """
    Reduce a raw token to a bare lower-case domain, or None if invalid.

    https://www.Example.com/path?q=1 -> example.com
    """
    if not raw:
        return None
    value = raw.strip().strip("\"'<>()[]").lower()
    value = SCHEME_PATTERN.sub("", value)
    for sep in ("/", "?", "#", ":"):
        value = value.split(sep, 1)[0]
    if value.startswith("www."):
        value = value[4:]
    value = value.rstrip(".")
    if not DOMAIN_PATTERN.match(value):
        return None
    return value


def _collect(
    lines: Iterable[Iterable[str]],
    channel: SourceChannel,
) -> NormalizeResult:
    """Each item of `lines` is the token list for one raw line/row."""
    records: list[DomainRecord] = []
    seen: set[str] = set()
    dropped = 0
    duplicates = 0

    for tokens in lines:
        found = False
        for token in tokens:
            name = clean_domain(token)
            if not name:
                continue
            found = True
            if name in seen:
                duplicates += 1
                continue
            seen.add(name)
            records.append(DomainRecord(name=name, source_channel=channel))
        if not found:
            dropped += 1

    return NormalizeResult(records=records, dropped=dropped, duplicates=duplicates)


def normalize_manual(text: str, channel: SourceChannel = SourceChannel.MANUAL) -> NormalizeResult:
    """
    Pasted free text: one domain per line, or comma/whitespace separated.

    A non-blank line with no valid domain counts as one dropped row.
    """
    lines = (
        [t for t in TOKEN_SEPARATORS.split(line) if t]
        for line in (text or "").splitlines()
        if line.strip()
    )
    return _collect(lines, channel)


def normalize_scraped(items: Iterable[str]) -> NormalizeResult:
    """Domain strings pulled from a scraped listing page."""
    return _collect(([item] for item in items), SourceChannel.FREE_SCRAPE)


def normalize_import(text: str, filename: str = None) -> NormalizeResult:
    """
    Entry point for file/paste imports.

    Vendor CSV exports are detected by header; anything else is read as
    manual free text.
    """
    from .vendor_csv import is_vendor_export, parse_vendor_csv

    if is_vendor_export(text):
        return parse_vendor_csv(text, filename)
    return normalize_manual(text)
