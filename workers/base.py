"""
Base worker class - handles async job lifecycle, single-flight and stats.

Concrete workers just implement _do_work().
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

from models import WorkerStats


class BaseWorker(ABC):
    """
    Base class for fire-and-forget jobs keyed by domain name.

    Handles:
    - Task lifecycle (submit/drain)
    - Single-flight: one outstanding job per key, duplicates are ignored
    - Stats tracking
    - Callbacks for notifications

    Subclasses implement _do_work() with their actual logic.
    """

    event_type = "job_done"

    def __init__(self, name: str):
        self.name = name
        self._tasks: dict[str, asyncio.Task] = {}
        self._callbacks: list[Callable] = []
        self.stats = WorkerStats()

    def is_in_flight(self, key: str) -> bool:
        return key in self._tasks

    @property
    def in_flight(self) -> list[str]:
        return list(self._tasks)

    def submit(self, key: str, *args: Any) -> Optional[asyncio.Task]:
        """
        Start a job for `key` on the running loop.

        Returns None if a job for the same key is still outstanding.
        Must be called from inside a running event loop.
        """
        if key in self._tasks:
            print(f"[{self.name}] {key} already in flight, ignoring")
            self.stats.record_skip()
            return None

        task = asyncio.get_running_loop().create_task(self._run(key, *args))
        self._tasks[key] = task
        self.stats.in_flight = len(self._tasks)
        return task

    async def drain(self) -> None:
        """Wait for every outstanding job."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks.values()), return_exceptions=True)

    def add_callback(self, callback: Callable) -> None:
        """Add callback for notifications."""
        self._callbacks.append(callback)

    def remove_callback(self, callback: Callable) -> None:
        """Remove callback."""
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    def notify(self, event_type: str, data: dict) -> None:
        """Notify all registered callbacks."""
        for cb in self._callbacks:
            try:
                cb(event_type, data)
            except Exception as e:
                print(f"[{self.name}] Callback error: {e}")

    async def _run(self, key: str, *args: Any) -> Any:
        """Run one job. Exceptions are turned into a failure result."""
        self.stats.record_run(key)
        try:
            result = await self._do_work(key, *args)
            self.stats.record_success(1)
        except Exception as e:
            print(f"[{self.name}] Error on {key}: {e}")
            self.stats.record_error(str(e))
            result = self._failure_result(key, e)
        finally:
            self._tasks.pop(key, None)
            self.stats.in_flight = len(self._tasks)

        self.notify(self.event_type, {"key": key, "result": result})
        return result

    def _failure_result(self, key: str, error: Exception) -> Any:
        """Value delivered to callbacks when _do_work raises. Override as needed."""
        return None

    @abstractmethod
    async def _do_work(self, key: str, *args: Any) -> Any:
        """
        Do the actual work.

        Args:
            key: Domain name the job is for

        Returns:
            Result passed to callbacks
        """
        pass

    def get_stats(self) -> dict:
        """Get stats as dict for display."""
        return {
            "name": self.name,
            **self.stats.to_dict(),
        }
