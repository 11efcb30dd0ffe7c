"""
In-Memory Roadmap Store - Infrastructure Layer

Process-local holder for loaded roadmaps and the completion records the
engine hands back. Used by the reference API and by tests; durable storage
is an external collaborator that implements the same methods.

Thread-safe: the API runs sync handlers in a thread pool.
"""
import logging
import threading
from typing import Dict, List, Optional

from domain.entities.roadmap import Roadmap
from domain.exceptions.domain_exceptions import NotFoundError
from domain.value_objects.completion_record import CompletionRecord


class InMemoryRoadmapStore:
    """
    Implements ICompletionStore plus simple roadmap lookup.

    Saving a roadmap under an existing id replaces the whole instance, the
    same way regeneration does.
    """

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self.logger = logger or logging.getLogger(__name__)
        self._roadmaps: Dict[str, Roadmap] = {}
        self._completions: Dict[str, List[CompletionRecord]] = {}
        self._lock = threading.RLock()

    def save(self, roadmap: Roadmap) -> Roadmap:
        with self._lock:
            replaced = roadmap.roadmap_id in self._roadmaps
            self._roadmaps[roadmap.roadmap_id] = roadmap
            self._completions[roadmap.roadmap_id] = []
        self.logger.debug(
            "%s roadmap %s", "Replaced" if replaced else "Stored", roadmap.roadmap_id
        )
        return roadmap

    def get(self, roadmap_id: str) -> Roadmap:
        with self._lock:
            roadmap = self._roadmaps.get(roadmap_id)
        if roadmap is None:
            raise NotFoundError("Roadmap", roadmap_id)
        return roadmap

    def list_ids(self) -> List[str]:
        with self._lock:
            return list(self._roadmaps)

    def record_completion(self, record: CompletionRecord) -> None:
        with self._lock:
            self._completions.setdefault(record.roadmap_id, []).append(record)

    def completions_for(self, roadmap_id: str) -> List[CompletionRecord]:
        with self._lock:
            return list(self._completions.get(roadmap_id, []))

    def clear(self) -> None:
        with self._lock:
            self._roadmaps.clear()
            self._completions.clear()
