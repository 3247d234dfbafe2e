"""
Aggregate store - persists the working set between CLI invocations.
"""

from aggregate import DomainAggregate
from models import DomainRecord
from repositories import StateRepository, get_repository, AGGREGATE


class AggregateStore:

    def __init__(self, repository: StateRepository = None, namespace: str = AGGREGATE):
        self._repo = repository or get_repository()
        self._namespace = namespace

    def load(self) -> DomainAggregate:
        records = []
        for item in self._repo.get(self._namespace) or []:
            try:
                records.append(DomainRecord.model_validate(item))
            except ValueError as e:
                print(f"[WARN] Skipping bad aggregate record: {e}")
        return DomainAggregate(records)

    def save(self, aggregate: DomainAggregate) -> None:
        self._repo.save(self._namespace, [r.model_dump(mode="json") for r in aggregate])

    def clear(self) -> bool:
        return self._repo.delete(self._namespace)
