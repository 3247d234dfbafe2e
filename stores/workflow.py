"""
Workflow store - the candidate, queued and owned collections.

Each collection is keyed by name and insertion ordered. Moves between
collections are separate remove/insert steps; the state machine sequences
them and saves after each step.
"""

from typing import Optional

from models import WorkflowRecord, OwnedDomain, ProfileStatus, WorkflowStage
from repositories import StateRepository, get_repository, WORKFLOW

INTERRUPTED_ERROR = "Profile generation was interrupted before it finished"


class WorkflowStore:

    def __init__(self, repository: StateRepository = None, namespace: str = WORKFLOW):
        self._repo = repository or get_repository()
        self._namespace = namespace
        self.candidates: dict[str, WorkflowRecord] = {}
        self.queued: dict[str, WorkflowRecord] = {}
        self.owned: dict[str, OwnedDomain] = {}

    def load(self) -> "WorkflowStore":
        """
        Read all three collections.

        Owned domains saved mid-generation come back as failed so the user
        can retry them; no task survives a restart.
        """
        data = self._repo.get(self._namespace) or {}
        self.candidates = self._load_stage(data.get("candidates", []), WorkflowRecord)
        self.queued = self._load_stage(data.get("queued", []), WorkflowRecord)
        self.owned = self._load_stage(data.get("owned", []), OwnedDomain)

        stale = [o for o in self.owned.values() if o.profile_status == ProfileStatus.GENERATING]
        for owned in stale:
            self.owned[owned.name] = owned.fail_generation(INTERRUPTED_ERROR)
        if stale:
            print(f"[WORKFLOW] {len(stale)} interrupted profile generation(s) marked failed")
        return self

    @staticmethod
    def _load_stage(items: list, model) -> dict:
        loaded = {}
        for item in items:
            try:
                entry = model.model_validate(item)
            except ValueError as e:
                print(f"[WARN] Skipping bad workflow entry: {e}")
                continue
            loaded.setdefault(entry.name, entry)
        return loaded

    def save(self) -> None:
        self._repo.save(self._namespace, {
            "candidates": [c.model_dump(mode="json") for c in self.candidates.values()],
            "queued": [q.model_dump(mode="json") for q in self.queued.values()],
            "owned": [o.model_dump(mode="json") for o in self.owned.values()],
        })

    def stage_of(self, name: str) -> Optional[WorkflowStage]:
        """Furthest stage holding this name."""
        if name in self.owned:
            return WorkflowStage.OWNED
        if name in self.queued:
            return WorkflowStage.QUEUED
        if name in self.candidates:
            return WorkflowStage.CANDIDATE
        return None
