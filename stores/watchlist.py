"""
Watchlist store - starred records with notes.

Independent of the workflow: starring or un-starring never moves a record
between stages, and a purchased domain can stay starred.
"""

import csv
from pathlib import Path
from typing import Callable, Optional

from models import DomainRecord, WatchlistEntry, WorkflowStage
from repositories import StateRepository, get_repository, WATCHLIST

EXPORT_COLUMNS = ["name", "tld", "score", "tier", "source", "stage", "added_at", "notes"]

StageLookup = Callable[[str], Optional[WorkflowStage]]


class WatchlistStore:
    """Ordered watchlist keyed by domain name, saved on every change."""

    def __init__(self, repository: StateRepository = None, namespace: str = WATCHLIST):
        self._repo = repository or get_repository()
        self._namespace = namespace
        self._entries: dict[str, WatchlistEntry] = {}

    def load(self) -> "WatchlistStore":
        data = self._repo.get(self._namespace) or []
        self._entries = {}
        for item in data:
            try:
                entry = WatchlistEntry.model_validate(item)
            except ValueError as e:
                print(f"[WARN] Skipping bad watchlist entry: {e}")
                continue
            self._entries.setdefault(entry.name, entry)
        return self

    def save(self) -> None:
        self._repo.save(
            self._namespace,
            [e.model_dump(mode="json") for e in self._entries.values()],
        )

    # Queries

    @property
    def entries(self) -> list[WatchlistEntry]:
        return list(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def is_watched(self, name: str) -> bool:
        return name in self._entries

    def get(self, name: str) -> Optional[WatchlistEntry]:
        return self._entries.get(name)

    # Mutations

    def toggle(self, record: DomainRecord, notes: str = None) -> bool:
        """Star or un-star. Returns True if the record is now watched."""
        if record.name in self._entries:
            del self._entries[record.name]
            self.save()
            return False
        self._entries[record.name] = WatchlistEntry(record=record, notes=notes or None)
        self.save()
        return True

    def add(self, record: DomainRecord, notes: str = None) -> bool:
        """Star if not already starred. Returns False on no-op."""
        if record.name in self._entries:
            return False
        return self.toggle(record, notes)

    def remove(self, name: str) -> bool:
        if self._entries.pop(name, None) is None:
            return False
        self.save()
        return True

    def update_notes(self, name: str, notes: Optional[str]) -> bool:
        entry = self._entries.get(name)
        if entry is None:
            return False
        self._entries[name] = entry.with_notes(notes)
        self.save()
        return True

    def clear(self) -> None:
        self._entries = {}
        self.save()

    # Export

    def export_rows(self, stage_of: StageLookup = None) -> list[dict]:
        """Flat rows for CSV/spreadsheet use."""
        rows = []
        for entry in self._entries.values():
            record = entry.record
            stage = stage_of(record.name) if stage_of else None
            rows.append({
                "name": record.name,
                "tld": record.tld,
                "score": record.score.overall if record.score else "",
                "tier": record.tier.value,
                "source": record.source_channel.value,
                "stage": stage.value if stage else "",
                "added_at": entry.added_at.isoformat(),
                "notes": entry.notes or "",
            })
        return rows

    def export_csv(self, path: Path, stage_of: StageLookup = None) -> int:
        """Write the watchlist as CSV. Returns the number of rows."""
        rows = self.export_rows(stage_of)
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=EXPORT_COLUMNS)
            writer.writeheader()
            writer.writerows(rows)
        print(f"[WATCHLIST] Exported {len(rows)} entries to {path}")
        return len(rows)
