"""
Roadmap View DTOs - Application Layer

Outputs of TrackRoadmapProgressUseCase. The API layer maps these to
Pydantic schemas; the domain never sees Pydantic.
"""
from dataclasses import dataclass, field
from typing import List

from domain.entities.milestone import Milestone
from domain.entities.skill_node import SkillNode
from domain.value_objects.completion_record import CompletionRecord

from .progress_report import ProgressReport


@dataclass
class RecommendationView:
    """Ranked skills and milestones for the recommendation panels."""

    next_learnable_skills: List[SkillNode] = field(default_factory=list)
    locked_skills: List[SkillNode] = field(default_factory=list)
    urgent_milestones: List[Milestone] = field(default_factory=list)
    quick_wins: List[Milestone] = field(default_factory=list)


@dataclass
class CompletionOutcome:
    """
    Result of a completion command after the caller-side recomputation.

    newly_available_skills lists skills that were locked before the
    completion and are available after it, in canonical order.
    """

    record: CompletionRecord
    progress: ProgressReport
    newly_learned_skills: List[str] = field(default_factory=list)
    newly_available_skills: List[str] = field(default_factory=list)
