"""
Phase Entity - Clean Architecture Domain Layer
Ordered stage of a roadmap with a planned duration and its milestones
"""
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

from .milestone import Milestone
from ..exceptions.domain_exceptions import ValidationError


@dataclass(frozen=True)
class Phase:
    """
    Structurally immutable phase of a roadmap.

    The milestone tuple never changes after creation; only the completion
    fields of the contained Milestone entities move.
    """
    phase_id: str
    order: int
    title: str
    duration_months: int
    description: str = ""
    milestones: Tuple[Milestone, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "milestones", tuple(self.milestones))
        self._validate_phase()

    def _validate_phase(self):
        if not self.phase_id or not self.phase_id.strip():
            raise ValidationError("phase_id", "Phase id cannot be empty")

        if self.order < 0:
            raise ValidationError("order", f"Phase {self.phase_id} has a negative order")

        if self.duration_months < 0:
            raise ValidationError("duration_months", f"Phase {self.phase_id} has a negative duration")

        for milestone in self.milestones:
            if milestone.phase_id != self.phase_id:
                raise ValidationError(
                    "phase_id",
                    f"Milestone {milestone.milestone_id} references unknown phase '{milestone.phase_id}'",
                )

    def __iter__(self) -> Iterator[Milestone]:
        return iter(self.milestones)

    @property
    def total_milestones(self) -> int:
        return len(self.milestones)

    @property
    def completed_milestones(self) -> int:
        return sum(1 for m in self.milestones if m.is_completed)

    @property
    def skill_names(self) -> Tuple[str, ...]:
        """Unique skill names touched by this phase, in declared order"""
        seen = {}
        for milestone in self.milestones:
            for skill in milestone.skills:
                seen.setdefault(skill, None)
        return tuple(seen)

    def find_milestone(self, milestone_id: str) -> Optional[Milestone]:
        for milestone in self.milestones:
            if milestone.milestone_id == milestone_id:
                return milestone
        return None

    def __str__(self) -> str:
        return f"Phase({self.order}: {self.title}, {self.completed_milestones}/{self.total_milestones})"
