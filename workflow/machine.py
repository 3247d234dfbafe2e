"""
Acquisition workflow: candidate -> queued -> owned.

Stages only move forward. Candidates and queued entries can be discarded at
any time. Marking a queued domain purchased moves it to owned with its
profile already generating and fires the generation job without waiting.
Generation results land on the OwnedDomain out of band; results for a
domain that has since been removed are dropped.
"""

import asyncio
from typing import Awaitable, Callable, Optional

from models import (
    DomainRecord,
    GenerationResult,
    OwnedDomain,
    ProfileStatus,
    WorkflowRecord,
    WorkflowStage,
)
from stores import WorkflowStore
from workers import ProfileGenerationWorker


class AcquisitionWorkflow:
    """
    Owns the candidate, queued and owned collections.

    Every operation returns False/None for a no-op instead of raising.
    """

    def __init__(self, store: WorkflowStore, worker: ProfileGenerationWorker = None):
        self.store = store
        self.worker = worker or ProfileGenerationWorker()
        self.worker.add_callback(self._on_worker_event)

    # Queries

    @property
    def candidates(self) -> list[WorkflowRecord]:
        return list(self.store.candidates.values())

    @property
    def queued(self) -> list[WorkflowRecord]:
        return list(self.store.queued.values())

    @property
    def owned(self) -> list[OwnedDomain]:
        return list(self.store.owned.values())

    def stage_of(self, name: str) -> Optional[WorkflowStage]:
        return self.store.stage_of(name)

    def get_owned(self, name: str) -> Optional[OwnedDomain]:
        return self.store.owned.get(name)

    # Candidate / queue

    def add_candidate(self, record: DomainRecord) -> bool:
        """Send a scored record into analysis. No-op if already anywhere in the workflow."""
        if self.stage_of(record.name) is not None:
            return False
        self.store.candidates[record.name] = WorkflowRecord(
            record=record, stage=WorkflowStage.CANDIDATE,
        )
        self.store.save()
        print(f"[WORKFLOW] {record.name} added as candidate")
        return True

    def queue(self, name: str) -> bool:
        """Move a candidate into the purchase queue."""
        candidate = self.store.candidates.get(name)
        if candidate is None or name in self.store.queued or name in self.store.owned:
            return False
        self.store.queued[name] = WorkflowRecord(record=candidate.record, stage=WorkflowStage.QUEUED)
        self.store.save()
        del self.store.candidates[name]
        self.store.save()
        print(f"[WORKFLOW] {name} queued for purchase")
        return True

    def quick_queue(self, record: DomainRecord) -> bool:
        """Queue a record straight from the aggregate view, skipping candidate."""
        if record.name in self.store.candidates:
            return self.queue(record.name)
        if record.name in self.store.queued or record.name in self.store.owned:
            return False
        self.store.queued[record.name] = WorkflowRecord(record=record, stage=WorkflowStage.QUEUED)
        self.store.save()
        print(f"[WORKFLOW] {record.name} queued for purchase")
        return True

    def discard(self, name: str) -> bool:
        """Drop a candidate or queued entry. Owned domains use remove_owned()."""
        if self.store.candidates.pop(name, None) is not None:
            self.store.save()
            print(f"[WORKFLOW] {name} discarded from candidates")
            return True
        if self.store.queued.pop(name, None) is not None:
            self.store.save()
            print(f"[WORKFLOW] {name} discarded from queue")
            return True
        return False

    # Owned

    def mark_purchased(self, name: str) -> Optional[asyncio.Task]:
        """
        queued -> owned, then start profile generation.

        Steps run in order and are saved individually: remove from queue,
        insert OwnedDomain(generating), submit the generation job. Returns the
        job task, or None if `name` was not queued.
        Must be called from inside a running event loop.
        """
        queued = self.store.queued.get(name)
        if queued is None or name in self.store.owned:
            return None

        del self.store.queued[name]
        self.store.save()

        owned = OwnedDomain(record=queued.record, profile_status=ProfileStatus.GENERATING)
        self.store.owned[name] = owned
        self.store.save()
        print(f"[WORKFLOW] {name} purchased, generating profile")

        return self.worker.submit(name, queued.record.metrics)

    def retry_profile(self, name: str) -> Optional[asyncio.Task]:
        """
        failed -> generating for an owned domain.

        Ignored while a generation for the same name is still in flight.
        purchased_at and the entry itself are left untouched.
        """
        owned = self.store.owned.get(name)
        if owned is None or not owned.can_retry:
            return None
        if self.worker.is_in_flight(name):
            return None

        self.store.owned[name] = owned.begin_generation()
        self.store.save()
        print(f"[WORKFLOW] Retrying profile for {name}")
        return self.worker.submit(name, owned.record.metrics)

    def apply_generation_result(self, name: str, result: GenerationResult) -> bool:
        """Record a generation outcome. Dropped if the domain is gone or not generating."""
        owned = self.store.owned.get(name)
        if owned is None:
            print(f"[WORKFLOW] Dropping profile result for removed domain {name}")
            return False
        if owned.profile_status != ProfileStatus.GENERATING:
            return False

        if result.success and result.profile is not None:
            self.store.owned[name] = owned.complete_generation(result.profile)
            print(f"[WORKFLOW] Profile ready for {name}")
        else:
            error = result.error or "Profile generation failed"
            self.store.owned[name] = owned.fail_generation(error)
            print(f"[WORKFLOW] Profile failed for {name}: {error}")
        self.store.save()
        return True

    def mark_site_created(self, name: str) -> bool:
        """Set site_created. Independent of profile status; never reverts."""
        owned = self.store.owned.get(name)
        if owned is None:
            return False
        if not owned.site_created:
            self.store.owned[name] = owned.mark_site_created()
            self.store.save()
            print(f"[WORKFLOW] Site created for {name}")
        return True

    async def create_site(self, name: str, provision: Callable[[str], Awaitable[bool]]) -> bool:
        """Run a site provisioner and flip site_created on success."""
        if name not in self.store.owned:
            return False
        if not await provision(name):
            print(f"[WORKFLOW] Site creation failed for {name}")
            return False
        return self.mark_site_created(name)

    def remove_owned(self, name: str) -> bool:
        if self.store.owned.pop(name, None) is None:
            return False
        self.store.save()
        print(f"[WORKFLOW] {name} removed from owned")
        return True

    def _on_worker_event(self, event_type: str, data: dict) -> None:
        if event_type != ProfileGenerationWorker.event_type:
            return
        result = data.get("result")
        if not isinstance(result, GenerationResult):
            result = GenerationResult.failure("Profile generation returned no result")
        self.apply_generation_result(data["key"], result)
