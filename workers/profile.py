"""
Profile generation worker.

Runs the profile generator for an owned domain and reports a
GenerationResult through the "profile_generated" callback event. The
generator may raise or return a failure; either way callers get a result,
never an exception.
"""

from typing import Optional

from models import DomainMetrics, GenerationResult
from profiles import ProfileGenerator
from .base import BaseWorker


class ProfileGenerationError(Exception):
    """Generator returned an unsuccessful result."""


class ProfileGenerationWorker(BaseWorker):

    event_type = "profile_generated"

    def __init__(self, generator: ProfileGenerator = None):
        super().__init__("profile")
        self._generator = generator

    @property
    def generator(self) -> ProfileGenerator:
        if self._generator is None:
            from profiles import LLMProfileGenerator
            self._generator = LLMProfileGenerator()
        return self._generator

    async def _do_work(self, key: str, metrics: Optional[DomainMetrics] = None) -> GenerationResult:
        result = await self.generator.generate(key, metrics)
        if not isinstance(result, GenerationResult):
            raise ProfileGenerationError("Generator returned no result")
        if not result.success or result.profile is None:
            raise ProfileGenerationError(result.error or "Profile generation failed")
        print(f"[{self.name}] {key}: niche '{result.profile.niche}'")
        return result

    def _failure_result(self, key: str, error: Exception) -> GenerationResult:
        return GenerationResult.failure(str(error))
