"""
Aggregate view - merged working set plus filtering, sorting and paging.
"""

from .aggregator import DomainAggregate, merge
from .filters import DomainFilters, FilteredView, Page, apply, matches, paginate, sort_key

__all__ = [
    "DomainAggregate",
    "merge",
    "DomainFilters",
    "FilteredView",
    "Page",
    "apply",
    "matches",
    "paginate",
    "sort_key",
]
