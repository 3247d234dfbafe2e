"""
Free scrape channel - pull recently deleted domains from a public listing page.

Failures come back as ScrapeResult(success=False) with an ActionRequired hint
the caller can show as-is.
"""

import asyncio
import re
from typing import Optional

import requests
from bs4 import BeautifulSoup

from config import FREE_SCRAPE_URL, FREE_SCRAPE_TIMEOUT, FREE_SCRAPE_LIMIT, FREE_SCRAPE_HEADERS
from models import ActionRequired, ActionType, ScrapeResult
from .normalizer import normalize_scraped

DOMAIN_IN_TEXT = re.compile(r"\b([a-z0-9][a-z0-9-]{0,61}[a-z0-9]?\.[a-z]{2,10})\b", re.IGNORECASE)
CAPTCHA_MARKERS = ("captcha", "are you a robot", "cf-challenge")

# Hosts that show up in page chrome, never listings
SKIP_PATTERNS = ("google.", "facebook.", "twitter.", "cloudflare", "jquery", "bootstrap")
MIN_LENGTH = 5
MAX_LENGTH = 50


def parse_keywords(keyword_filter: Optional[str]) -> list[str]:
    """'seo, tech' -> ['seo', 'tech']"""
    if not keyword_filter:
        return []
    return [k.strip().lower() for k in keyword_filter.split(",") if k.strip()]


def extract_domains(html: str, source_host: str = "") -> list[str]:
    """Candidate domain strings from a listing page, in page order."""
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(["script", "style", "noscript"]):
        tag.decompose()

    texts = [a.get_text(" ", strip=True) for a in soup.find_all("a")]
    texts.append(soup.get_text(" ", strip=True))

    found: list[str] = []
    seen: set[str] = set()
    for text in texts:
        for match in DOMAIN_IN_TEXT.findall(text):
            domain = match.lower()
            if domain in seen:
                continue
            if source_host and source_host in domain:
                continue
            if any(skip in domain for skip in SKIP_PATTERNS):
                continue
            if not MIN_LENGTH <= len(domain) <= MAX_LENGTH:
                continue
            seen.add(domain)
            found.append(domain)
    return found


class FreeScrapeClient:
    """Fetch the deleted-domains listing with requests and parse it with bs4."""

    name = "free-scrape"

    def __init__(
        self,
        url: str = FREE_SCRAPE_URL,
        timeout: float = FREE_SCRAPE_TIMEOUT,
        limit: int = FREE_SCRAPE_LIMIT,
        session: requests.Session = None,
    ):
        self.url = url
        self.timeout = timeout
        self.limit = limit
        self.session = session or requests.Session()

    @property
    def source_host(self) -> str:
        host = re.sub(r"^https?://", "", self.url).split("/", 1)[0]
        return host[4:] if host.startswith("www.") else host

    def _failure(self, error: str, type: ActionType, message: str, action: str) -> ScrapeResult:
        print(f"[{self.name}] {error}")
        return ScrapeResult(
            success=False,
            error=error,
            source=self.source_host,
            action_required=ActionRequired(type=type, message=message, action=action, url=self.url),
        )

    def fetch(self, keyword_filter: str = None) -> ScrapeResult:
        """Blocking fetch. Never raises."""
        try:
            r = self.session.get(self.url, headers=FREE_SCRAPE_HEADERS, timeout=self.timeout)
        except requests.Timeout:
            return self._failure(
                "Request timed out", ActionType.NETWORK,
                "The listing site did not answer in time.",
                "Check your connection and try again.",
            )
        except requests.RequestException as e:
            return self._failure(
                f"Network error: {e}", ActionType.NETWORK,
                "Could not reach the listing site.",
                "Check your connection and try again.",
            )

        if r.status_code == 403:
            return self._failure(
                "Access denied (403)", ActionType.BLOCKED,
                "The listing site blocked automated access.",
                "Open the site in a browser, export the list and paste it instead.",
            )
        if r.status_code == 429:
            return self._failure(
                "Rate limited (429)", ActionType.RATE_LIMIT,
                "Too many requests to the listing site.",
                "Wait a few minutes before scraping again.",
            )
        if r.status_code >= 400:
            return self._failure(
                f"HTTP {r.status_code}", ActionType.NETWORK,
                "The listing site returned an error.",
                "Try again later.",
            )

        html = r.text or ""
        lowered = html.lower()
        if any(marker in lowered for marker in CAPTCHA_MARKERS):
            return self._failure(
                "CAPTCHA challenge", ActionType.CAPTCHA,
                "The listing site wants a CAPTCHA solved.",
                "Solve it in a browser, then paste the domains manually.",
            )

        domains = extract_domains(html, self.source_host)
        if not domains:
            return self._failure(
                "No domains found on page", ActionType.BLOCKED,
                "The page loaded but no domains could be read from it.",
                "Open the site in a browser and paste the domains manually.",
            )

        keywords = parse_keywords(keyword_filter)
        if keywords:
            domains = [d for d in domains if any(k in d for k in keywords)]

        result = normalize_scraped(domains[: self.limit])
        print(f"[{self.name}] Found {len(result.records)} domains")
        return ScrapeResult(
            success=True,
            records=result.records,
            dropped=result.dropped,
            source=self.source_host,
        )

    async def fetch_async(self, keyword_filter: str = None) -> ScrapeResult:
        """Run fetch() off the event loop."""
        return await asyncio.to_thread(self.fetch, keyword_filter)
