"""
JSON file backend - one file per namespace.

Directory structure:
    state/
        watchlist.json            - Watchlist entries
        workflow.json             - candidates / queued / owned
        vendor_credentials.json   - {"configured": bool}
        aggregate.json            - CLI working set
"""

import json
import threading
from pathlib import Path
from typing import Any, Optional

import config
from .base import StateRepository


class WriteQueue:
    """Thread-safe write serialization."""

    def __init__(self):
        self._lock = threading.Lock()

    def write_json(self, path: Path, data: Any) -> None:
        """Atomic JSON write."""
        with self._lock:
            temp = path.with_suffix(".json.tmp")
            with open(temp, "w") as f:
                json.dump(data, f, indent=2, default=str)
            temp.replace(path)


_write_queue = WriteQueue()


class JsonStateRepository(StateRepository):
    """JSON file implementation of the state repository."""

    def __init__(self, base_path: Path = None):
        self._base_path = Path(base_path) if base_path else config.STATE_DIR

    @property
    def base_path(self) -> Path:
        return self._base_path

    def _file(self, namespace: str) -> Path:
        return self._base_path / f"{namespace}.json"

    def get(self, namespace: str) -> Optional[Any]:
        path = self._file(namespace)
        if not path.exists():
            return None

        try:
            with open(path) as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            print(f"[WARN] Corrupt {namespace}.json: {e}")
            return None

    def save(self, namespace: str, data: Any) -> None:
        self._base_path.mkdir(parents=True, exist_ok=True)
        _write_queue.write_json(self._file(namespace), data)

    def delete(self, namespace: str) -> bool:
        path = self._file(namespace)
        if not path.exists():
            return False
        path.unlink()
        return True

    def list(self) -> list[str]:
        if not self._base_path.exists():
            return []
        return sorted(p.stem for p in self._base_path.glob("*.json"))

    def exists(self, namespace: str) -> bool:
        return self._file(namespace).exists()
