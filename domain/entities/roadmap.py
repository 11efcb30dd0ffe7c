"""
Roadmap Entity - Clean Architecture Domain Layer
Aggregate root holding the ordered phases and milestones of a career roadmap
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, FrozenSet, Iterator, List, Optional, Tuple

from .milestone import Milestone
from .phase import Phase
from ..exceptions.domain_exceptions import NotFoundError, ValidationError


class RoadmapDifficulty(Enum):
    """Difficulty tier chosen by the roadmap generator"""
    BEGINNER = "BEGINNER"
    INTERMEDIATE = "INTERMEDIATE"
    ADVANCED = "ADVANCED"
    EXPERT = "EXPERT"


class LearningStyle(Enum):
    VISUAL = "visual"
    AUDITORY = "auditory"
    KINESTHETIC = "kinesthetic"
    READING = "reading"


@dataclass(frozen=True)
class Personalization:
    """Value object with the learner settings the roadmap was generated for"""
    learning_style: LearningStyle = LearningStyle.VISUAL
    time_commitment: str = ""  # e.g. "10-15h/week"


@dataclass
class Roadmap:
    """
    Aggregate root for a personalised roadmap.

    Created once from a validated document and never partially rebuilt:
    regeneration replaces the whole instance. Phases are stored sorted by
    order, which is the canonical traversal order for every derived view.
    """
    roadmap_id: str
    target_role: str
    difficulty: RoadmapDifficulty
    estimated_duration_months: int
    phases: Tuple[Phase, ...] = ()
    personalization: Personalization = field(default_factory=Personalization)
    title: str = ""
    description: str = ""
    created_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        """Validate roadmap invariants"""
        self.phases = tuple(sorted(self.phases, key=lambda p: p.order))
        self._validate_roadmap()
        self._milestone_index: Dict[str, Milestone] = {
            m.milestone_id: m for m in self.iter_milestones()
        }

    def _validate_roadmap(self):
        """Business rule: structure must be well formed before entering the engine"""
        if not self.roadmap_id or not self.roadmap_id.strip():
            raise ValidationError("roadmap_id", "Roadmap id cannot be empty")

        if not self.target_role or not self.target_role.strip():
            raise ValidationError("target_role", "Target role cannot be empty")

        if not isinstance(self.difficulty, RoadmapDifficulty):
            raise ValidationError("difficulty", "Must be a valid RoadmapDifficulty enum")

        if self.estimated_duration_months < 0:
            raise ValidationError("estimated_duration_months", "Estimated duration cannot be negative")

        orders = [p.order for p in self.phases]
        if orders != list(range(len(self.phases))):
            raise ValidationError(
                "phases",
                f"Phase orders must be unique and contiguous 0..{len(self.phases) - 1}, got {orders}",
            )

        phase_ids = set()
        for phase in self.phases:
            if phase.phase_id in phase_ids:
                raise ValidationError("phases", f"Duplicate phase id '{phase.phase_id}'")
            phase_ids.add(phase.phase_id)

        milestone_ids = set()
        for milestone in self.iter_milestones():
            if milestone.milestone_id in milestone_ids:
                raise ValidationError("milestones", f"Duplicate milestone id '{milestone.milestone_id}'")
            milestone_ids.add(milestone.milestone_id)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------

    def list_phases(self) -> List[Phase]:
        """Phases in ascending order"""
        return list(self.phases)

    def iter_milestones(self) -> Iterator[Milestone]:
        """All milestones in canonical order (phase order, then declared order)"""
        for phase in self.phases:
            yield from phase.milestones

    def find_milestone(self, milestone_id: str) -> Optional[Milestone]:
        return self._milestone_index.get(milestone_id)

    def get_milestone(self, milestone_id: str) -> Milestone:
        """Like find_milestone but raises NotFoundError for unknown ids"""
        milestone = self.find_milestone(milestone_id)
        if milestone is None:
            raise NotFoundError("Milestone", milestone_id)
        return milestone

    def find_phase(self, phase_id: str) -> Optional[Phase]:
        for phase in self.phases:
            if phase.phase_id == phase_id:
                return phase
        return None

    def total_skill_names(self) -> List[str]:
        """Unique skill names across the roadmap, first-sighting order"""
        seen = {}
        for milestone in self.iter_milestones():
            for skill in milestone.skills:
                seen.setdefault(skill, None)
        return list(seen)

    def completed_milestone_ids(self) -> FrozenSet[str]:
        """Snapshot of the current completion state"""
        return frozenset(m.milestone_id for m in self.iter_milestones() if m.is_completed)

    @property
    def total_milestones(self) -> int:
        return len(self._milestone_index)

    @property
    def total_estimated_hours(self) -> int:
        return sum(m.estimated_hours for m in self.iter_milestones())

    def __str__(self) -> str:
        return f"Roadmap({self.roadmap_id}, {self.target_role}, {len(self.phases)} phases)"
