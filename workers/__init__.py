"""
Background workers for non-blocking operations.

Jobs are asyncio tasks on the caller's loop, one per domain at a time.

Workers:
- ProfileGenerationWorker: Generates the content profile for an owned domain
"""

from .base import BaseWorker
from .profile import ProfileGenerationWorker, ProfileGenerationError

__all__ = [
    "BaseWorker",
    "ProfileGenerationWorker",
    "ProfileGenerationError",
]
