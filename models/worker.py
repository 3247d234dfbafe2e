"""
Counters for the profile generation worker.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class WorkerStats(BaseModel):
    """Updated in place by the worker after every job."""
    runs: int = 0
    successes: int = 0
    errors: int = 0
    items_processed: int = 0
    items_skipped: int = 0  # submissions refused while the same domain is in flight

    last_run: Optional[datetime] = None
    last_error_message: Optional[str] = None
    last_domain: Optional[str] = None
    in_flight: int = 0

    def record_run(self, domain: Optional[str] = None) -> None:
        self.runs += 1
        self.last_run = datetime.now()
        if domain:
            self.last_domain = domain

    def record_success(self, items: int = 0) -> None:
        self.successes += 1
        self.items_processed += items

    def record_error(self, message: Optional[str] = None) -> None:
        self.errors += 1
        self.last_error_message = message

    def record_skip(self) -> None:
        self.items_skipped += 1

    def to_dict(self) -> dict:
        return {
            "runs": self.runs,
            "successes": self.successes,
            "errors": self.errors,
            "items_processed": self.items_processed,
            "items_skipped": self.items_skipped,
            "last_run": self.last_run.isoformat() if self.last_run else None,
            "last_error": self.last_error_message,
            "last_domain": self.last_domain,
            "in_flight": self.in_flight,
        }
