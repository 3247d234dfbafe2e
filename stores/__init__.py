"""
Stores - process-wide persisted collections with explicit load()/save().
"""

from .watchlist import WatchlistStore
from .workflow import WorkflowStore
from .credentials import CredentialFlagStore
from .aggregate import AggregateStore

__all__ = [
    "WatchlistStore",
    "WorkflowStore",
    "CredentialFlagStore",
    "AggregateStore",
]
