"""Unit tests for DomainRecord and related values."""

import pytest
from pydantic import ValidationError

from models import DomainMetrics, DomainRecord, DomainScore, SourceChannel, Tier, Recommendation

pytestmark = pytest.mark.unit


class TestDomainRecord:
    """Test DomainRecord model."""

    def test_tld_derived_from_name(self):
        record = DomainRecord(name="Example.COM", source_channel=SourceChannel.MANUAL)
        assert record.name == "example.com"
        assert record.tld == "com"
        assert record.label == "example"

    def test_multi_label_tld_is_last_label(self):
        record = DomainRecord(name="shop.example.co.uk", source_channel=SourceChannel.MANUAL)
        assert record.tld == "uk"

    def test_defaults(self):
        record = DomainRecord(name="example.com", source_channel="free-scrape")
        assert record.source_channel == SourceChannel.FREE_SCRAPE
        assert record.metrics is None
        assert record.enriched is False
        assert record.score is None
        assert record.tier == Tier.UNSCORED
        assert record.overall == 0

    def test_records_are_immutable(self):
        record = DomainRecord(name="example.com", source_channel=SourceChannel.MANUAL)
        with pytest.raises(ValidationError):
            record.name = "other.com"

    def test_with_score_replaces_whole_score(self):
        record = DomainRecord(name="example.com", source_channel=SourceChannel.MANUAL)
        first = record.with_score(DomainScore(overall=40, tier=Tier.BRONZE))
        second = first.with_score(DomainScore(overall=90, tier=Tier.GOLD,
                                              recommendation=Recommendation.STRONG_BUY))

        assert record.score is None
        assert first.score.overall == 40
        assert second.score.overall == 90
        assert second.score.recommendation == Recommendation.STRONG_BUY
        assert second.fetched_at == record.fetched_at

    def test_with_metrics_merges_and_marks_enriched(self):
        record = DomainRecord(
            name="example.com",
            source_channel=SourceChannel.VENDOR_CSV,
            metrics=DomainMetrics(trust_flow=10, topics="Pets"),
        )
        updated = record.with_metrics(DomainMetrics(trust_flow=20, domain_authority=30))

        assert updated.metrics.trust_flow == 20
        assert updated.metrics.domain_authority == 30
        assert updated.metrics.topics == "Pets"
        assert updated.enriched is True
        assert updated.source_channel == SourceChannel.VENDOR_CSV

    def test_roundtrip_through_json(self):
        record = DomainRecord(
            name="example.com",
            source_channel=SourceChannel.VENDOR_CSV,
            metrics=DomainMetrics(trust_flow=10),
            score=DomainScore(overall=50, tier=Tier.BRONZE, recommendation=Recommendation.CONSIDER),
        )
        loaded = DomainRecord.model_validate(record.model_dump(mode="json"))
        assert loaded == record


class TestDomainMetrics:

    def test_ratio(self):
        assert DomainMetrics(trust_flow=20, citation_flow=40).tf_cf_ratio == 0.5

    def test_ratio_without_citation_flow(self):
        assert DomainMetrics(trust_flow=20).tf_cf_ratio == 0.0
        assert DomainMetrics(trust_flow=20, citation_flow=0).tf_cf_ratio == 0.0

    def test_merged_ignores_unset_fields(self):
        base = DomainMetrics(trust_flow=10, citation_flow=12)
        merged = base.merged(DomainMetrics(citation_flow=20))
        assert merged.trust_flow == 10
        assert merged.citation_flow == 20


class TestDomainScore:

    def test_overall_bounds(self):
        with pytest.raises(ValidationError):
            DomainScore(overall=101)
        with pytest.raises(ValidationError):
            DomainScore(overall=-1)
