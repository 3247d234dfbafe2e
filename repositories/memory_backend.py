"""
In-memory backend - nothing touches disk. Used by tests and dry runs.
"""

import copy
from typing import Any, Optional

from .base import StateRepository


class MemoryStateRepository(StateRepository):

    def __init__(self):
        self._data: dict[str, Any] = {}

    def get(self, namespace: str) -> Optional[Any]:
        # Copies so callers can't mutate stored state
        return copy.deepcopy(self._data.get(namespace))

    def save(self, namespace: str, data: Any) -> None:
        self._data[namespace] = copy.deepcopy(data)

    def delete(self, namespace: str) -> bool:
        return self._data.pop(namespace, None) is not None

    def list(self) -> list[str]:
        return sorted(self._data)

    def exists(self, namespace: str) -> bool:
        return namespace in self._data
