"""
Filter/sort engine for the aggregate view.
"""

import math
from typing import Optional, Sequence
from pydantic import BaseModel, Field

from config import PAGE_SIZE
from models import DomainRecord, SourceChannel, Tier, TIER_RANK


class DomainFilters(BaseModel):
    """Active filters. Empty/None fields don't filter."""
    source_channel: Optional[SourceChannel] = None
    min_score: int = 0
    tier: Optional[Tier] = None
    keyword: str = ""  # Comma-separated, OR-combined

    @property
    def keywords(self) -> list[str]:
        return [k.strip().lower() for k in self.keyword.split(",") if k.strip()]


class Page(BaseModel):
    items: list[DomainRecord] = Field(default_factory=list)
    page: int = 1
    total_pages: int = 1
    total: int = 0


def matches(record: DomainRecord, filters: DomainFilters) -> bool:
    if filters.source_channel and record.source_channel != filters.source_channel:
        return False
    if record.overall < filters.min_score:
        return False
    if filters.tier and record.tier != filters.tier:
        return False
    keywords = filters.keywords
    if keywords and not any(k in record.name for k in keywords):
        return False
    return True


def sort_key(record: DomainRecord) -> tuple[int, int]:
    """Best tier first, then highest overall."""
    return (TIER_RANK[record.tier], -record.overall)


def apply(records: Sequence[DomainRecord], filters: DomainFilters = None) -> list[DomainRecord]:
    """Filter then stable-sort. Ties keep insertion order."""
    filters = filters or DomainFilters()
    return sorted((r for r in records if matches(r, filters)), key=sort_key)


def paginate(records: Sequence[DomainRecord], page: int = 1, page_size: int = PAGE_SIZE) -> Page:
    """Pure slice. Out-of-range pages are clamped."""
    total = len(records)
    total_pages = max(1, math.ceil(total / page_size))
    page = min(max(1, page), total_pages)
    start = (page - 1) * page_size
    return Page(
        items=list(records[start:start + page_size]),
        page=page,
        total_pages=total_pages,
        total=total,
    )


class FilteredView:
    """
    Filters plus a page cursor over a record source.

    Changing any filter puts the cursor back on page 1.
    """

    def __init__(self, records: Sequence[DomainRecord] = (), page_size: int = PAGE_SIZE):
        self.records = list(records)
        self.page_size = page_size
        self.filters = DomainFilters()
        self.page = 1

    def set_records(self, records: Sequence[DomainRecord]) -> None:
        self.records = list(records)

    def set_filters(self, **changes) -> DomainFilters:
        updated = DomainFilters(**{**self.filters.model_dump(), **changes})
        if updated != self.filters:
            self.page = 1
        self.filters = updated
        return self.filters

    def reset_filters(self) -> None:
        self.filters = DomainFilters()
        self.page = 1

    def go_to(self, page: int) -> Page:
        self.page = page
        return self.current()

    def next_page(self) -> Page:
        return self.go_to(self.page + 1)

    def previous_page(self) -> Page:
        return self.go_to(self.page - 1)

    def results(self) -> list[DomainRecord]:
        return apply(self.records, self.filters)

    def current(self) -> Page:
        result = paginate(self.results(), self.page, self.page_size)
        self.page = result.page
        return result
