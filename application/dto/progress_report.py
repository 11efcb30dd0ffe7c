"""
Progress Report DTOs - Application Layer

Plain dataclasses produced by ProgressAggregatorService and consumed by the
API layer. No Pydantic, no HTTP concepts.
"""
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import List


class PhaseStatus(str, Enum):
    """Display status of a phase on the timeline."""

    COMPLETED = "completed"
    CURRENT = "current"
    UPCOMING = "upcoming"


@dataclass
class PhaseWindow:
    """
    Planned start/end window of one phase.

    The window comes from the declared schedule (durations accumulated from
    the start date); progress and status reflect actual completion and
    never move the window.
    """

    phase_id: str
    order: int
    title: str
    duration_months: int
    start_date: date
    end_date: date
    progress: float = 0.0
    status: PhaseStatus = PhaseStatus.UPCOMING
    completed_milestones: int = 0
    total_milestones: int = 0


@dataclass
class MilestoneStats:
    """Flat milestone counts across the whole roadmap."""

    total: int = 0
    completed: int = 0

    @property
    def pending(self) -> int:
        return self.total - self.completed

    @property
    def percentage(self) -> int:
        """Completed share of all milestones, rounded to a whole percent."""
        if self.total == 0:
            return 0
        return round(self.completed / self.total * 100)


@dataclass
class ProgressReport:
    """Everything the progress views need for one roadmap snapshot."""

    roadmap_id: str
    phase_progress: List[float] = field(default_factory=list)
    overall_progress: float = 0.0
    current_phase_index: int = 0
    completed_phase_count: int = 0
    remaining_months: int = 0
    milestone_stats: MilestoneStats = field(default_factory=MilestoneStats)
