"""
Milestone Entity - Clean Architecture Domain Layer
Actionable unit of work within a phase, touching one or more skills
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional, Tuple

from ..exceptions.domain_exceptions import AlreadyCompletedError, ValidationError


class MilestoneType(Enum):
    """Kinds of milestones a roadmap generator can emit"""
    SKILL = "skill"
    PROJECT = "project"
    CERTIFICATION = "certification"
    EXPERIENCE = "experience"
    NETWORKING = "networking"


class MilestonePriority(Enum):
    """Milestone priority as assigned by the generator"""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ResourceType(Enum):
    COURSE = "course"
    BOOK = "book"
    ARTICLE = "article"
    VIDEO = "video"
    PRACTICE = "practice"
    COMMUNITY = "community"
    TOOL = "tool"


class ResourceCost(Enum):
    FREE = "free"
    PAID = "paid"
    SUBSCRIPTION = "subscription"


@dataclass(frozen=True)
class Resource:
    """Value object describing a learning resource attached to a milestone"""
    resource_type: ResourceType
    title: str
    cost: ResourceCost = ResourceCost.FREE
    description: Optional[str] = None
    url: Optional[str] = None
    provider: Optional[str] = None
    rating: Optional[float] = None

    def __post_init__(self):
        if not self.title or not self.title.strip():
            raise ValidationError("resources.title", "Resource title cannot be empty")
        if self.rating is not None and not (0 <= self.rating <= 5):
            raise ValidationError("resources.rating", "Rating must be between 0 and 5")


@dataclass
class Milestone:
    """
    Entity representing a milestone in a roadmap phase.

    Everything except the completion fields is fixed at creation. The
    completion fields move Pending -> Completed exactly once; there is no
    reopening transition.
    """
    milestone_id: str
    phase_id: str
    title: str
    milestone_type: MilestoneType = MilestoneType.SKILL
    priority: MilestonePriority = MilestonePriority.MEDIUM
    description: str = ""
    estimated_hours: int = 0
    skills: Tuple[str, ...] = ()
    resources: Tuple[Resource, ...] = ()
    success_criteria: Tuple[str, ...] = ()

    # Completion state
    is_completed: bool = False
    completed_at: Optional[datetime] = None
    completion_notes: Optional[str] = None

    def __post_init__(self):
        """Validate milestone invariants"""
        self.skills = tuple(self.skills)
        self.resources = tuple(self.resources)
        self.success_criteria = tuple(self.success_criteria)
        self._validate_milestone()

    def _validate_milestone(self):
        if not self.milestone_id or not self.milestone_id.strip():
            raise ValidationError("milestone_id", "Milestone id cannot be empty")

        if not self.phase_id or not self.phase_id.strip():
            raise ValidationError("phase_id", f"Milestone {self.milestone_id} has no phase id")

        if not isinstance(self.milestone_type, MilestoneType):
            raise ValidationError("milestone_type", "Must be a valid MilestoneType enum")

        if not isinstance(self.priority, MilestonePriority):
            raise ValidationError("priority", "Must be a valid MilestonePriority enum")

        if self.estimated_hours < 0:
            raise ValidationError("estimated_hours", "Estimated hours cannot be negative")

        if any(not skill or not skill.strip() for skill in self.skills):
            raise ValidationError("skills", f"Milestone {self.milestone_id} lists an empty skill name")

        if self.is_completed and self.completed_at is None:
            raise ValidationError("completed_at", "Completed milestone must carry a completion timestamp")

        if not self.is_completed and self.completed_at is not None:
            raise ValidationError("completed_at", "Pending milestone cannot carry a completion timestamp")

    def mark_completed(self, completed_at: datetime, notes: Optional[str] = None) -> None:
        """
        Business rule: Pending -> Completed, single-fire.
        Raises AlreadyCompletedError without touching existing state.
        """
        if self.is_completed:
            raise AlreadyCompletedError(self.milestone_id, self.completed_at)

        # Timestamp first: lock-free readers never see completed without completed_at
        self.completed_at = completed_at
        self.completion_notes = notes
        self.is_completed = True

    def discard_unsaved_completion(self) -> None:
        """
        Return to Pending after a completion that could not be persisted.

        Not a reopen transition: only called by the completion use case
        while it still holds the roadmap lock.
        """
        self.is_completed = False
        self.completed_at = None
        self.completion_notes = None

    @property
    def is_pending(self) -> bool:
        return not self.is_completed

    def touches_skill(self, skill_name: str) -> bool:
        return skill_name in self.skills

    def __eq__(self, other) -> bool:
        """Milestones are equal if they share an id"""
        if not isinstance(other, Milestone):
            return False
        return self.milestone_id == other.milestone_id

    def __hash__(self) -> int:
        return hash(self.milestone_id)

    def __str__(self) -> str:
        state = "completed" if self.is_completed else "pending"
        return f"Milestone({self.milestone_id}, {self.milestone_type.value}, {state})"
