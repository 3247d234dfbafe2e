"""Unit tests for filtering, sorting and pagination."""

import pytest

from aggregate import DomainFilters, FilteredView, apply, paginate
from models import SourceChannel, Tier

pytestmark = pytest.mark.unit


@pytest.fixture
def records(make_record):
    return [
        make_record("manual-one.com"),
        make_record("bronze.net", trust_flow=20, citation_flow=20, domain_authority=30, vendor_risk_score=18),
        make_record("gold-a.com", trust_flow=40, citation_flow=35, domain_authority=50, age_years=6, vendor_risk_score=8),
        make_record("avoid.org", trust_flow=2, vendor_risk_score=80),
        make_record("gold-b.com", trust_flow=40, citation_flow=35, domain_authority=50, age_years=6, vendor_risk_score=8),
        make_record("petshop.io", SourceChannel.FREE_SCRAPE),
        make_record("silver.net", trust_flow=25, citation_flow=30, domain_authority=30, age_years=8, vendor_risk_score=12),
    ]


class TestApply:

    def test_sort_order(self, records):
        names = [r.name for r in apply(records)]
        assert names[:4] == ["gold-a.com", "gold-b.com", "silver.net", "bronze.net"]
        assert names[4] == "avoid.org"
        assert set(names[5:]) == {"manual-one.com", "petshop.io"}

    def test_stable_for_ties(self, records):
        once = [r.name for r in apply(records)]
        twice = [r.name for r in apply(list(reversed(records)))]
        # gold-a/gold-b tie: order follows input order
        assert once.index("gold-a.com") < once.index("gold-b.com")
        assert twice.index("gold-b.com") < twice.index("gold-a.com")
        assert [r.name for r in apply(records)] == once

    def test_unscored_sorted_by_overall(self, records):
        unscored = [r for r in apply(records) if r.tier == Tier.UNSCORED]
        overalls = [r.overall for r in unscored]
        assert overalls == sorted(overalls, reverse=True)

    def test_source_filter(self, records):
        result = apply(records, DomainFilters(source_channel=SourceChannel.FREE_SCRAPE))
        assert [r.name for r in result] == ["petshop.io"]

    def test_min_score(self, records):
        result = apply(records, DomainFilters(min_score=60))
        assert all(r.overall >= 60 for r in result)
        assert "avoid.org" not in [r.name for r in result]

    def test_tier_filter(self, records):
        result = apply(records, DomainFilters(tier=Tier.GOLD))
        assert [r.name for r in result] == ["gold-a.com", "gold-b.com"]

    def test_keyword_or(self, records):
        result = apply(records, DomainFilters(keyword="PET, silver"))
        assert [r.name for r in result] == ["silver.net", "petshop.io"]

    def test_blank_keywords_match_everything(self, records):
        assert len(apply(records, DomainFilters(keyword=" , "))) == len(records)


class TestPaginate:

    def test_slices(self, make_record):
        records = [make_record(f"site{i:02d}.com") for i in range(25)]
        page = paginate(records, 3, page_size=10)
        assert page.total == 25
        assert page.total_pages == 3
        assert [r.name for r in page.items] == [f"site{i:02d}.com" for i in range(20, 25)]

    def test_out_of_range_clamped(self, make_record):
        records = [make_record(f"site{i}.com") for i in range(5)]
        assert paginate(records, 99, page_size=2).page == 3
        assert paginate(records, 0, page_size=2).page == 1

    def test_empty(self):
        page = paginate([], 1)
        assert page.items == []
        assert page.total_pages == 1


class TestFilteredView:

    def test_filter_change_resets_page(self, make_record):
        view = FilteredView([make_record(f"site{i}.com") for i in range(30)], page_size=10)
        view.go_to(3)
        assert view.page == 3

        view.set_filters(keyword="site1")
        assert view.page == 1

    def test_same_filters_keep_page(self, make_record):
        view = FilteredView([make_record(f"site{i}.com") for i in range(30)], page_size=10)
        view.set_filters(min_score=0)
        view.go_to(2)
        view.set_filters(min_score=0)
        assert view.page == 2

    def test_navigation(self, make_record):
        view = FilteredView([make_record(f"site{i}.com") for i in range(15)], page_size=10)
        assert len(view.current().items) == 10
        assert len(view.next_page().items) == 5
        assert view.next_page().page == 2
        assert view.previous_page().page == 1

    def test_string_filters_validated(self, make_record):
        view = FilteredView([make_record("a.com")])
        view.set_filters(tier="gold", source_channel="manual")
        assert view.filters.tier == Tier.GOLD
        assert view.filters.source_channel == SourceChannel.MANUAL

    def test_reset_and_new_records(self, make_record):
        view = FilteredView([make_record("a.com")])
        view.set_filters(keyword="zzz")
        assert view.results() == []

        view.reset_filters()
        view.set_records([make_record("a.com"), make_record("b.com")])
        assert len(view.results()) == 2
        assert view.filters == DomainFilters()
