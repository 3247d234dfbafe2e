"""
Repository base classes - define the interface.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

# Fixed namespaces for persisted state
WATCHLIST = "watchlist"
WORKFLOW = "workflow"
VENDOR_CREDENTIALS = "vendor_credentials"
AGGREGATE = "aggregate"


class StateRepository(ABC):
    """
    Abstract key/value store for persisted state.

    Each namespace holds one JSON-serializable value (list or dict).
    """

    @abstractmethod
    def get(self, namespace: str) -> Optional[Any]:
        """Get the value stored under a namespace, None if absent."""
        pass

    @abstractmethod
    def save(self, namespace: str, data: Any) -> None:
        """Replace the value stored under a namespace."""
        pass

    @abstractmethod
    def delete(self, namespace: str) -> bool:
        """Delete a namespace. Returns True if deleted."""
        pass

    @abstractmethod
    def list(self) -> list[str]:
        """List stored namespaces."""
        pass

    @abstractmethod
    def exists(self, namespace: str) -> bool:
        """Check if a namespace has been saved."""
        pass
