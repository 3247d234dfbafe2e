"""
Unit test fixtures.

All unit tests should be:
- Fast (< 100ms)
- Isolated (no external dependencies)
- Deterministic (same result every time)
"""

import asyncio
from datetime import datetime

import pytest

from models import DomainMetrics, DomainProfile, DomainRecord, GenerationResult, SourceChannel
from profiles import ProfileGenerator
from repositories import MemoryStateRepository
from scoring import rescore


@pytest.fixture
def fixed_time():
    """Fixed datetime for deterministic tests."""
    return datetime(2024, 1, 15, 12, 0, 0)


@pytest.fixture
def make_record():
    """
    Factory for scored records.

        make_record("example.com")                       # manual, heuristic score
        make_record("x.com", trust_flow=40, vendor_risk_score=8)  # vendor-csv
    """
    def make(name: str, channel: SourceChannel = None, **metrics) -> DomainRecord:
        if channel is None:
            channel = SourceChannel.VENDOR_CSV if metrics else SourceChannel.MANUAL
        record = DomainRecord(
            name=name,
            source_channel=channel,
            metrics=DomainMetrics(**metrics) if metrics else None,
        )
        return rescore(record)
    return make


@pytest.fixture
def gold_metrics():
    """Vendor metrics scoring 85 / gold."""
    return DomainMetrics(
        trust_flow=40, citation_flow=35, domain_authority=50, age_years=6, vendor_risk_score=8,
    )


@pytest.fixture
def memory_repo():
    return MemoryStateRepository()


class FakeGenerator(ProfileGenerator):
    """
    Scripted profile generator.

    outcomes: "ok", an error string, or an Exception instance, consumed in order
    (default "ok"). Set `gate` to hold every call until the event is set.
    """

    def __init__(self, outcomes=None):
        self.outcomes = list(outcomes or [])
        self.calls: list[str] = []
        self.gate: asyncio.Event = None

    async def generate(self, domain, metrics=None):
        self.calls.append(domain)
        if self.gate is not None:
            await self.gate.wait()
        outcome = self.outcomes.pop(0) if self.outcomes else "ok"
        if isinstance(outcome, Exception):
            raise outcome
        if outcome == "ok":
            return GenerationResult.ok(DomainProfile(domain=domain, niche="Pet care"))
        return GenerationResult.failure(outcome)


@pytest.fixture
def make_generator():
    def make(*outcomes) -> FakeGenerator:
        return FakeGenerator(outcomes)
    return make
