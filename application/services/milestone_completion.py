"""
Milestone Completion Service - Application Layer

The single mutation entry point of the engine: moves one milestone from
Pending to Completed and signals that derived views are stale.

Rules:
  - unknown milestone id          → NotFoundError
  - milestone already completed   → AlreadyCompletedError, state untouched
  - success                       → is_completed=True, completed_at=now,
                                    completion_notes=notes, CompletionRecord
                                    returned, listeners notified

This service does NOT recompute skill availability or progress and does NOT
persist anything. Re-running the resolver/aggregator, persistence and reward
side effects belong to the caller (see TrackRoadmapProgressUseCase).
"""
import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional

from domain.entities.roadmap import Roadmap
from domain.exceptions.domain_exceptions import AlreadyCompletedError
from domain.value_objects.completion_record import CompletionRecord

logger = logging.getLogger(__name__)

CompletionListener = Callable[[Roadmap, CompletionRecord], None]


def utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)


class MilestoneCompletionService:
    """
    Applies the Pending → Completed transition.

    Usage:
        service = MilestoneCompletionService()
        service.subscribe(lambda roadmap, record: ...)
        record = service.complete_milestone(roadmap, "milestone-python-0", notes="done")
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None) -> None:
        self._clock = clock or utc_now
        self._listeners: List[CompletionListener] = []

    def subscribe(self, listener: CompletionListener) -> None:
        """Register a callback invoked after every successful completion."""
        self._listeners.append(listener)

    def complete_milestone(
        self,
        roadmap: Roadmap,
        milestone_id: str,
        notes: Optional[str] = None,
    ) -> CompletionRecord:
        """
        Complete one milestone of a roadmap.

        Args:
            roadmap:      Roadmap aggregate owning the milestone.
            milestone_id: Id of the milestone to complete.
            notes:        Optional learner notes stored with the completion.

        Returns:
            CompletionRecord with the milestone id and completion timestamp.

        Raises:
            NotFoundError:         If the roadmap has no such milestone.
            AlreadyCompletedError: If the milestone was completed before.
        """
        milestone = roadmap.get_milestone(milestone_id)

        try:
            milestone.mark_completed(self._clock(), notes)
        except AlreadyCompletedError:
            logger.info(
                "Rejected duplicate completion of milestone '%s' in roadmap '%s'",
                milestone_id, roadmap.roadmap_id,
            )
            raise

        record = CompletionRecord(
            roadmap_id=roadmap.roadmap_id,
            milestone_id=milestone.milestone_id,
            completed_at=milestone.completed_at,
            notes=notes,
        )
        logger.info(
            "Milestone '%s' completed in roadmap '%s'",
            milestone_id, roadmap.roadmap_id,
        )

        for listener in self._listeners:
            listener(roadmap, record)

        return record
