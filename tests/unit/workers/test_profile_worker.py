"""Unit tests for the profile generation worker."""

import asyncio
from unittest.mock import MagicMock

import pytest

from models import DomainMetrics, GenerationResult
from workers import ProfileGenerationWorker

pytestmark = pytest.mark.unit


def run_job(worker, name="petcare.com", metrics=None):
    async def run():
        return await worker.submit(name, metrics)
    return asyncio.run(run())


class TestProfileWorker:

    def test_success(self, make_generator):
        generator = make_generator("ok")
        worker = ProfileGenerationWorker(generator)
        callback = MagicMock()
        worker.add_callback(callback)

        result = run_job(worker, metrics=DomainMetrics(trust_flow=10))

        assert result.success
        assert result.profile.niche == "Pet care"
        assert generator.calls == ["petcare.com"]
        callback.assert_called_once_with("profile_generated", {"key": "petcare.com", "result": result})
        assert worker.stats.successes == 1

    def test_failure_result(self, make_generator):
        worker = ProfileGenerationWorker(make_generator("Model refused"))

        result = run_job(worker)

        assert isinstance(result, GenerationResult)
        assert not result.success
        assert result.error == "Model refused"
        assert worker.stats.errors == 1

    def test_raising_generator(self, make_generator):
        worker = ProfileGenerationWorker(make_generator(RuntimeError("connection reset")))

        result = run_job(worker)

        assert not result.success
        assert "connection reset" in result.error

    def test_generator_returning_garbage(self):
        class Broken:
            async def generate(self, domain, metrics=None):
                return {"niche": "nope"}

        worker = ProfileGenerationWorker(Broken())
        result = run_job(worker)

        assert not result.success
        assert result.error == "Generator returned no result"
