"""Unit tests for the free scrape and vendor enrichment clients (HTTP mocked)."""

import asyncio
from unittest.mock import MagicMock

import pytest
import requests

from models import ActionType, SourceChannel
from sources import FreeScrapeClient, SpamZillaClient, extract_domains, metrics_from_payload, parse_keywords

LISTING_HTML = """
<html><body>
  <div class="logo">expireddomains.net</div>
  <table>
    <tr><td><a href="/d/1">coolpets.com</a></td><td>2024-01-01</td></tr>
    <tr><td><a href="/d/2">seotools.net</a></td><td>2024-01-01</td></tr>
    <tr><td><a href="/d/3">petshop.io</a></td><td>2024-01-01</td></tr>
  </table>
  <footer>Protected by cloudflare.com</footer>
  <script>var cdn = "jquery.com";</script>
</body></html>
"""

pytestmark = pytest.mark.unit


def make_session(status=200, text="", exc=None, json_body=None):
    session = MagicMock()
    if exc is not None:
        session.get.side_effect = exc
    else:
        response = MagicMock(status_code=status, text=text)
        response.json.return_value = json_body
        session.get.return_value = response
    return session


class TestExtractDomains:

    def test_listing(self):
        domains = extract_domains(LISTING_HTML, "expireddomains.net")
        assert domains == ["coolpets.com", "seotools.net", "petshop.io"]

    def test_empty_page(self):
        assert extract_domains("<html><body>Nothing here</body></html>") == []

    def test_parse_keywords(self):
        assert parse_keywords(" Pets, ,SEO ") == ["pets", "seo"]
        assert parse_keywords(None) == []


class TestFreeScrape:

    def test_success(self):
        client = FreeScrapeClient(session=make_session(text=LISTING_HTML))
        result = client.fetch()

        assert result.success
        assert [r.name for r in result.records] == ["coolpets.com", "seotools.net", "petshop.io"]
        assert all(r.source_channel == SourceChannel.FREE_SCRAPE for r in result.records)
        assert result.action_required is None

    def test_keyword_filter_is_or(self):
        client = FreeScrapeClient(session=make_session(text=LISTING_HTML))
        result = client.fetch("pet, nothing")
        assert [r.name for r in result.records] == ["coolpets.com", "petshop.io"]

    def test_limit(self):
        client = FreeScrapeClient(session=make_session(text=LISTING_HTML), limit=2)
        assert len(client.fetch().records) == 2

    @pytest.mark.parametrize("status,action", [
        (403, ActionType.BLOCKED),
        (429, ActionType.RATE_LIMIT),
        (500, ActionType.NETWORK),
    ])
    def test_http_errors(self, status, action):
        client = FreeScrapeClient(session=make_session(status=status))
        result = client.fetch()

        assert not result.success
        assert result.records == []
        assert result.error
        assert result.action_required.type == action
        assert result.action_required.url == client.url

    def test_captcha(self):
        client = FreeScrapeClient(session=make_session(text="<html>Please solve this CAPTCHA</html>"))
        result = client.fetch()
        assert result.action_required.type == ActionType.CAPTCHA

    def test_timeout(self):
        client = FreeScrapeClient(session=make_session(exc=requests.Timeout("slow")))
        result = client.fetch()
        assert not result.success
        assert result.action_required.type == ActionType.NETWORK

    def test_connection_error(self):
        client = FreeScrapeClient(session=make_session(exc=requests.ConnectionError("down")))
        result = client.fetch()
        assert result.action_required.type == ActionType.NETWORK
        assert "down" in result.error

    def test_nothing_parsed_is_blocked(self):
        client = FreeScrapeClient(session=make_session(text="<html><body>Hi</body></html>"))
        result = client.fetch()
        assert result.action_required.type == ActionType.BLOCKED

    def test_async_wrapper(self):
        client = FreeScrapeClient(session=make_session(text=LISTING_HTML))
        result = asyncio.run(client.fetch_async("seo"))
        assert [r.name for r in result.records] == ["seotools.net"]


class TestEnrichment:

    def test_payload_aliases(self):
        m = metrics_from_payload({
            "tf": "40", "citation_flow": 35, "da": 50, "backlinks": 1200,
            "rd": "150", "domain_age": 6, "spam_score": 8, "topics": ["Pets", "Health"],
        })
        assert m.trust_flow == 40
        assert m.citation_flow == 35
        assert m.domain_authority == 50
        assert m.backlink_count == 1200
        assert m.referring_domain_count == 150
        assert m.age_years == 6
        assert m.vendor_risk_score == 8
        assert m.topics == "Pets, Health"

    def test_payload_ignores_junk(self):
        m = metrics_from_payload({"tf": "n/a", "unknown": 1})
        assert m.trust_flow is None

    def test_payload_drops_non_finite(self):
        m = metrics_from_payload({"tf": "NaN", "da": float("inf"), "sz_score": 5})
        assert m.trust_flow is None
        assert m.domain_authority is None
        assert m.vendor_risk_score == 5

    def test_enrich(self):
        session = make_session(json_body={"success": True, "data": {"tf": 20, "cf": 25, "sz_score": 5}})
        client = SpamZillaClient(api_key="key", session=session)
        result = client.enrich(["example.com"])

        assert result.metrics["example.com"].trust_flow == 20
        assert result.failed == {}
        url = session.get.call_args.args[0]
        assert url.endswith("/domain/example.com")
        assert session.get.call_args.kwargs["headers"]["Authorization"] == "Bearer key"

    def test_invalid_key(self):
        client = SpamZillaClient(api_key="bad", session=make_session(status=401))
        result = client.enrich(["example.com"])
        assert result.metrics == {}
        assert result.failed == {"example.com": "Invalid API key"}

    def test_vendor_reports_failure(self):
        session = make_session(json_body={"success": False, "error": "Domain not found"})
        result = SpamZillaClient(api_key="key", session=session).enrich(["nope.com"])
        assert result.failed == {"nope.com": "Domain not found"}

    def test_not_configured(self):
        session = make_session()
        result = SpamZillaClient(api_key="", session=session).enrich(["a.com", "b.com"])
        assert set(result.failed) == {"a.com", "b.com"}
        session.get.assert_not_called()

    def test_one_failure_does_not_stop_the_rest(self):
        ok = MagicMock(status_code=200)
        ok.json.return_value = {"success": True, "data": {"tf": 10}}
        session = MagicMock()
        session.get.side_effect = [requests.ConnectionError("reset"), ok]

        result = SpamZillaClient(api_key="key", session=session).enrich(["a.com", "b.com"])
        assert list(result.metrics) == ["b.com"]
        assert "a.com" in result.failed
