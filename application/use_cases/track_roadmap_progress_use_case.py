"""
Track Roadmap Progress Use Case - Application Layer

Entry point for everything the display/API layer asks of the engine:
the pure queries (skill map, progress, timeline, recommendations) and the
one mutation, complete_milestone.

Completion runs under a per-roadmap lock so concurrent attempts against the
same roadmap never interleave:

  lock → complete (MilestoneCompletionService) → persist (ICompletionStore)
       → on persist failure: back to Pending, re-raise
       → recompute views → notify reward listeners → unlock

Persistence and rewards are external collaborators behind Protocol
interfaces; they run only after the transition succeeded.
"""
import logging
import threading
import weakref
from datetime import date
from typing import Dict, List, Optional, Protocol, runtime_checkable

from domain.entities.roadmap import Roadmap
from domain.entities.skill_node import SkillNode
from domain.value_objects.completion_record import CompletionRecord

from application.dto.progress_report import PhaseWindow, ProgressReport
from application.dto.roadmap_views import CompletionOutcome, RecommendationView
from application.services.availability_resolver import AvailabilityResolverService
from application.services.milestone_completion import MilestoneCompletionService
from application.services.progress_aggregator import ProgressAggregatorService
from application.services.recommendation_engine import (
    DEFAULT_MILESTONE_LIMIT,
    DEFAULT_SKILL_LIMIT,
    RecommendationEngineService,
)
from application.services.skill_graph_builder import SkillGraphBuilderService

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Collaborator interfaces (Dependency Inversion)
# ---------------------------------------------------------------------------

@runtime_checkable
class ICompletionStore(Protocol):
    """Durably stores a successful completion."""

    def record_completion(self, record: CompletionRecord) -> None: ...


@runtime_checkable
class IRewardListener(Protocol):
    """Reacts to a completion event (quests, credits, ...)."""

    def on_milestone_completed(self, record: CompletionRecord) -> None: ...


# ---------------------------------------------------------------------------
# Use Case
# ---------------------------------------------------------------------------

class TrackRoadmapProgressUseCase:
    """
    Facade over the engine services with single-writer completion.

    Usage:
        use_case = TrackRoadmapProgressUseCase(completion_store=store)
        skills = use_case.skill_map(roadmap)
        outcome = use_case.complete_milestone(roadmap, "milestone-python-0")
    """

    def __init__(
        self,
        completion_store: Optional[ICompletionStore] = None,
        reward_listeners: Optional[List[IRewardListener]] = None,
        graph_builder: Optional[SkillGraphBuilderService] = None,
        availability_resolver: Optional[AvailabilityResolverService] = None,
        progress_aggregator: Optional[ProgressAggregatorService] = None,
        recommendation_engine: Optional[RecommendationEngineService] = None,
        completion_service: Optional[MilestoneCompletionService] = None,
    ) -> None:
        self._store = completion_store
        self._rewards = list(reward_listeners or [])
        self._graph = graph_builder or SkillGraphBuilderService()
        self._resolver = availability_resolver or AvailabilityResolverService()
        self._progress = progress_aggregator or ProgressAggregatorService()
        self._recommender = recommendation_engine or RecommendationEngineService()
        self._completion = completion_service or MilestoneCompletionService()

        # Entries vanish once no thread holds or waits on the lock
        self._locks: "weakref.WeakValueDictionary[str, threading.Lock]" = weakref.WeakValueDictionary()
        self._locks_guard = threading.Lock()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def skill_map(self, roadmap: Roadmap) -> Dict[str, SkillNode]:
        """Resolved skill map for the roadmap's current completion state."""
        return self._resolver.resolve(self._graph.build(roadmap), roadmap.completed_milestone_ids())

    def progress(self, roadmap: Roadmap) -> ProgressReport:
        return self._progress.build_report(roadmap)

    def timeline(self, roadmap: Roadmap, start_date: date) -> List[PhaseWindow]:
        return self._progress.timeline_projection(roadmap, start_date)

    def recommendations(
        self,
        roadmap: Roadmap,
        skill_limit: int = DEFAULT_SKILL_LIMIT,
        milestone_limit: int = DEFAULT_MILESTONE_LIMIT,
    ) -> RecommendationView:
        skills = self.skill_map(roadmap)
        return RecommendationView(
            next_learnable_skills=self._recommender.next_learnable_skills(skills, skill_limit),
            locked_skills=self._recommender.locked_skills(skills, skill_limit),
            urgent_milestones=self._recommender.urgent_milestones(roadmap, milestone_limit),
            quick_wins=self._recommender.quick_wins(roadmap, milestone_limit),
        )

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def complete_milestone(
        self,
        roadmap: Roadmap,
        milestone_id: str,
        notes: Optional[str] = None,
    ) -> CompletionOutcome:
        """
        Complete a milestone and republish the derived views.

        Raises:
            NotFoundError:         Unknown milestone id.
            AlreadyCompletedError: Milestone was completed before; nothing
                                   is persisted or recomputed.
            Exception:             Whatever the completion store raised;
                                   the milestone is back to Pending.
        """
        with self._lock_for(roadmap.roadmap_id):
            before = self.skill_map(roadmap)
            record = self._completion.complete_milestone(roadmap, milestone_id, notes)

            if self._store is not None:
                try:
                    self._store.record_completion(record)
                except Exception:
                    # Unsaved completion goes back to Pending so the caller can retry
                    roadmap.get_milestone(milestone_id).discard_unsaved_completion()
                    logger.warning(
                        "Persisting completion of '%s' in roadmap '%s' failed; milestone left pending",
                        milestone_id, roadmap.roadmap_id,
                    )
                    raise

            after = self.skill_map(roadmap)
            outcome = CompletionOutcome(
                record=record,
                progress=self.progress(roadmap),
                newly_learned_skills=[
                    name for name, node in after.items()
                    if node.is_learned and not before[name].is_learned
                ],
                newly_available_skills=[
                    name for name, node in after.items()
                    if node.is_available and not before[name].is_available
                ],
            )

            for listener in self._rewards:
                listener.on_milestone_completed(record)

        logger.info(
            "Completion of '%s' in roadmap '%s' unlocked %d skill(s)",
            milestone_id, roadmap.roadmap_id, len(outcome.newly_available_skills),
        )
        return outcome

    def _lock_for(self, roadmap_id: str) -> threading.Lock:
        with self._locks_guard:
            lock = self._locks.get(roadmap_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[roadmap_id] = lock
            return lock
