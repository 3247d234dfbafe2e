"""Unit tests for the source normalizer and vendor CSV parser."""

import pytest

from models import SourceChannel, Tier
from sources import (
    clean_domain,
    detect_preset,
    is_adsense_ready,
    is_vendor_export,
    normalize_import,
    normalize_manual,
    normalize_scraped,
    parse_vendor_csv,
)

pytestmark = pytest.mark.unit


class TestCleanDomain:

    @pytest.mark.parametrize("raw,expected", [
        ("example.com", "example.com"),
        ("  EXAMPLE.com  ", "example.com"),
        ("https://www.Foo.org/path?q=1", "foo.org"),
        ("http://sub.example.co.uk:8080/x", "sub.example.co.uk"),
        ("www.example.net.", "example.net"),
        ('"quoted.io"', "quoted.io"),
        ("my-site.info", "my-site.info"),
    ])
    def test_valid(self, raw, expected):
        assert clean_domain(raw) == expected

    @pytest.mark.parametrize("raw", [
        "", "example", "example.c", "-bad.com", "bad-.com", "under_score.com", "exa mple.com", "12345",
    ])
    def test_invalid(self, raw):
        assert clean_domain(raw) is None


class TestManual:

    def test_paste(self, sample_domains):
        result = normalize_manual(sample_domains)

        assert [r.name for r in result.records] == ["example.com", "foo.org", "bar.net", "baz.io"]
        assert all(r.source_channel == SourceChannel.MANUAL for r in result.records)
        assert all(r.metrics is None for r in result.records)
        assert result.dropped == 1
        assert result.duplicates == 1

    def test_empty(self):
        result = normalize_manual("")
        assert result.records == []
        assert result.dropped == 0

    def test_never_raises_on_garbage(self):
        result = normalize_manual("%%%\n\x00\n;;;,,,\n")
        assert result.records == []
        assert result.dropped == 3

    def test_scraped_channel(self):
        result = normalize_scraped(["coolpets.com", "nope", "COOLPETS.com"])
        assert [r.name for r in result.records] == ["coolpets.com"]
        assert result.records[0].source_channel == SourceChannel.FREE_SCRAPE
        assert result.dropped == 1
        assert result.duplicates == 1


class TestVendorCsv:

    def test_detects_header(self, vendor_csv_text):
        assert is_vendor_export(vendor_csv_text)

    def test_detection_is_case_insensitive(self):
        assert is_vendor_export("name,tf,cf,sz score\nexample.com,1,2,3")

    def test_needs_both_columns(self):
        assert not is_vendor_export("Name,TF,CF\nexample.com,10,12")
        assert not is_vendor_export("Name,SZ Score\nexample.com,10")

    def test_parse(self, vendor_csv_text):
        result = parse_vendor_csv(vendor_csv_text, "SZ-gold-export.csv")

        assert [r.name for r in result.records] == ["domain.com", "cleanpets.net", "spammy.info"]
        assert result.dropped == 2
        assert result.vendor_format
        assert result.preset == "gold"

        first = result.records[0]
        assert first.source_channel == SourceChannel.VENDOR_CSV
        assert first.metrics.trust_flow == 40
        assert first.metrics.citation_flow == 35
        assert first.metrics.domain_authority == 50
        assert first.metrics.age_years == 6
        assert first.metrics.vendor_risk_score == 8
        assert first.metrics.active_content_years == 5
        assert first.metrics.backlink_count == 1200
        assert first.metrics.topics == "Business/Marketing"
        assert first.metrics.auction_source == "GoDaddy"
        assert first.metrics.price == "$120"
        assert first.score is None  # scored by the aggregate

    def test_column_order_is_free(self):
        text = "SZ Score,Name,Moz DA,TF,CF,Age\n8,domain.com,50,40,35,6\n"
        record = parse_vendor_csv(text).records[0]
        assert record.metrics.trust_flow == 40
        assert record.metrics.vendor_risk_score == 8
        assert record.metrics.domain_authority == 50

    def test_active_history_alias(self):
        text = "Name,TF,CF,SZ Score,SZ A/History\nexample.com,10,10,5,7\n"
        assert parse_vendor_csv(text).records[0].metrics.active_content_years == 7

    def test_blank_numbers_are_zero(self):
        text = "Name,TF,CF,SZ Score,Moz DA\nexample.com,,abc,5,\n"
        m = parse_vendor_csv(text).records[0].metrics
        assert m.trust_flow == 0
        assert m.citation_flow == 0
        assert m.domain_authority == 0

    def test_non_finite_numbers_are_zero(self):
        text = "Name,TF,CF,SZ Score,Moz DA,Age\nnanland.com,nan,35,NaN,inf,-Infinity\n"
        result = normalize_import(text, "export.csv")

        m = result.records[0].metrics
        assert (m.trust_flow, m.vendor_risk_score, m.domain_authority, m.age_years) == (0, 0, 0, 0)
        assert m.citation_flow == 35
        assert result.stats.avg_trust_flow == 0

    def test_stats(self, vendor_csv_text):
        stats = parse_vendor_csv(vendor_csv_text).stats
        assert stats.total == 3
        assert stats.adsense_ready == 2
        assert stats.avg_trust_flow == 22.7
        assert stats.avg_risk_score == 26.7
        assert stats.avg_domain_authority == 28.3

    def test_adsense_ready(self, vendor_csv_text):
        from scoring import rescore

        ready = [is_adsense_ready(rescore(r)) for r in parse_vendor_csv(vendor_csv_text).records]
        assert ready == [True, True, False]

    def test_unscored_is_not_adsense_ready(self, vendor_csv_text):
        assert not is_adsense_ready(parse_vendor_csv(vendor_csv_text).records[0])

    @pytest.mark.parametrize("filename,preset", [
        ("SZ_gold_2024.csv", "gold"),
        ("safe relax.csv", "safe-relax"),
        ("max-volume-export.csv", "max-volume"),
        ("SZ-safe-to-relax.csv", "safe-relax"),
        ("SZ_safe_to_relax.csv", "safe-relax"),
        ("safetorelax.csv", "safe-relax"),
        ("SZ-maximum-volume.csv", "max-volume"),
        ("maximumvolume.csv", "max-volume"),
        ("whatever.csv", "custom"),
        (None, "custom"),
    ])
    def test_presets(self, filename, preset):
        assert detect_preset(filename) == preset


class TestNormalizeImport:

    def test_vendor_detected(self, vendor_csv_text):
        result = normalize_import(vendor_csv_text, "export.csv")
        assert result.vendor_format
        assert all(r.source_channel == SourceChannel.VENDOR_CSV for r in result.records)

    def test_falls_back_to_manual(self):
        result = normalize_import("Name,TF\nexample.com,10\n")
        assert not result.vendor_format
        assert [r.name for r in result.records] == ["example.com"]
        assert result.records[0].source_channel == SourceChannel.MANUAL
        assert result.dropped == 1

    def test_scored_vendor_tiers(self, vendor_csv_text):
        from scoring import rescore

        tiers = [rescore(r).tier for r in normalize_import(vendor_csv_text).records]
        assert tiers == [Tier.GOLD, Tier.SILVER, Tier.AVOID]
