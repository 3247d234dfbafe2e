"""
Aggregator - the merged working set of discovered domains.

Merges are additive and first-write-wins: a name already present keeps its
record, later channels only add unseen names. Enrichment is the one path that
updates an existing record (metrics merged, then re-scored).
"""

from typing import Iterable, Iterator, Optional, Union

from models import DomainMetrics, DomainRecord, NormalizeResult
from scoring import rescore

ChannelResult = Union[NormalizeResult, Iterable[DomainRecord]]


def _records_of(result: ChannelResult) -> Iterable[DomainRecord]:
    if isinstance(result, NormalizeResult):
        return result.records
    return result


class DomainAggregate:
    """Insertion-ordered collection of DomainRecords keyed by name."""

    def __init__(self, records: Iterable[DomainRecord] = ()):
        self._records: dict[str, DomainRecord] = {}
        for record in records:
            self._records.setdefault(record.name, record)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[DomainRecord]:
        return iter(list(self._records.values()))

    def __contains__(self, name: str) -> bool:
        return name in self._records

    @property
    def records(self) -> list[DomainRecord]:
        return list(self._records.values())

    def get(self, name: str) -> Optional[DomainRecord]:
        return self._records.get(name)

    def add(self, *channel_results: ChannelResult) -> int:
        """Insert unseen names, scoring each once. Returns how many were added."""
        added = 0
        for result in channel_results:
            for record in _records_of(result):
                if record.name in self._records:
                    continue
                self._records[record.name] = record if record.score else rescore(record)
                added += 1
        return added

    def merge(self, *channel_results: ChannelResult) -> list[DomainRecord]:
        """Merge channel results and return the whole working set."""
        self.add(*channel_results)
        return self.records

    def apply_enrichment(self, metrics_by_name: dict[str, DomainMetrics]) -> int:
        """
        Attach vendor metrics to existing records and re-score them.

        Names not in the set are dropped. A second enrichment for the same
        name overwrites the first (last write wins).
        """
        updated = 0
        for name, metrics in metrics_by_name.items():
            record = self._records.get(name)
            if record is None:
                continue
            self._records[name] = rescore(record.with_metrics(metrics))
            updated += 1
        return updated

    def remove(self, name: str) -> bool:
        return self._records.pop(name, None) is not None

    def clear(self) -> None:
        self._records.clear()


def merge(*channel_results: ChannelResult) -> list[DomainRecord]:
    """One-shot merge of channel results into a fresh, deduplicated list."""
    return DomainAggregate().merge(*channel_results)
