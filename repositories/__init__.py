"""
Repository layer - abstracts persistence.

Usage:
    from repositories import get_repository, WATCHLIST

    repo = get_repository()  # Returns configured backend
    entries = repo.get(WATCHLIST) or []
    repo.save(WATCHLIST, entries)

Backends are swappable via configure_backend().
"""

from .base import (
    StateRepository,
    WATCHLIST,
    WORKFLOW,
    VENDOR_CREDENTIALS,
    AGGREGATE,
)
from .json_backend import JsonStateRepository
from .memory_backend import MemoryStateRepository

# Default backend - can be changed via configure_backend()
_backend: str = "json"
_options: dict = {}
_instance: StateRepository = None


def get_repository() -> StateRepository:
    """Get the configured repository instance."""
    global _instance

    if _instance is None:
        if _backend == "json":
            _instance = JsonStateRepository(**_options)
        elif _backend == "memory":
            _instance = MemoryStateRepository()
        else:
            raise ValueError(f"Unknown backend: {_backend}")

    return _instance


def configure_backend(backend: str, **kwargs) -> None:
    """Configure the repository backend (json takes base_path=...)."""
    global _backend, _options, _instance
    _backend = backend
    _options = kwargs
    _instance = None  # Force re-initialization


__all__ = [
    "get_repository",
    "configure_backend",
    "StateRepository",
    "JsonStateRepository",
    "MemoryStateRepository",
    "WATCHLIST",
    "WORKFLOW",
    "VENDOR_CREDENTIALS",
    "AGGREGATE",
]
