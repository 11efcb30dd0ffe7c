"""
Progress Aggregator Service - Application Layer

Computes phase / overall completion, the current phase and the planned
timeline of a roadmap.

  phase_progress      = completed / total milestones, 0.0 for an empty phase
  overall_progress    = unweighted mean of phase_progress over all phases
                        (a 2-milestone phase counts as much as a 40-milestone one)
  current_phase_index = first phase with progress < 1.0, else the last phase
  timeline_projection = declared schedule: phase durations accumulated from
                        a start date, never adjusted by actual velocity
  remaining_months    = ceil(estimated_duration_months × (1 − overall)),
                        an approximation independent of the timeline windows

All methods are pure reads over the roadmap's current completion state.
"""
import calendar
import logging
import math
from datetime import date
from typing import List, Optional

from domain.entities.milestone import Milestone, MilestonePriority
from domain.entities.phase import Phase
from domain.entities.roadmap import Roadmap

from application.dto.progress_report import MilestoneStats, PhaseStatus, PhaseWindow, ProgressReport

logger = logging.getLogger(__name__)


def add_months(start: date, months: int) -> date:
    """Calendar-month addition, clamping the day to the target month's end."""
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


class ProgressAggregatorService:
    """
    Aggregates milestone completion into phase and roadmap progress.

    Usage:
        aggregator = ProgressAggregatorService()
        overall = aggregator.overall_progress(roadmap)
        windows = aggregator.timeline_projection(roadmap, date(2026, 1, 1))
    """

    # ------------------------------------------------------------------
    # Core progress
    # ------------------------------------------------------------------

    def phase_progress(self, phase: Phase) -> float:
        total = phase.total_milestones
        if total == 0:
            return 0.0
        return phase.completed_milestones / total

    def all_phase_progress(self, roadmap: Roadmap) -> List[float]:
        return [self.phase_progress(phase) for phase in roadmap.list_phases()]

    def overall_progress(self, roadmap: Roadmap) -> float:
        progress = self.all_phase_progress(roadmap)
        if not progress:
            return 0.0
        return sum(progress) / len(progress)

    def current_phase_index(self, roadmap: Roadmap) -> int:
        progress = self.all_phase_progress(roadmap)
        for index, value in enumerate(progress):
            if not self._is_complete(value):
                return index
        return max(len(progress) - 1, 0)

    def completed_phase_count(self, roadmap: Roadmap) -> int:
        return sum(1 for value in self.all_phase_progress(roadmap) if self._is_complete(value))

    def remaining_months(self, roadmap: Roadmap) -> int:
        remaining = roadmap.estimated_duration_months * (1 - self.overall_progress(roadmap))
        # round first so float noise such as 8.000000000000002 does not ceil to 9
        return max(math.ceil(round(remaining, 9)), 0)

    # ------------------------------------------------------------------
    # Timeline
    # ------------------------------------------------------------------

    def timeline_projection(self, roadmap: Roadmap, start_date: date) -> List[PhaseWindow]:
        """
        Walk phases in order and lay out their planned windows.

        Each phase starts where the previous one ended. Windows depend only on
        start_date and declared durations.
        """
        current_index = self.current_phase_index(roadmap)
        windows: List[PhaseWindow] = []
        cursor = start_date

        for index, phase in enumerate(roadmap.list_phases()):
            end = add_months(cursor, phase.duration_months)
            progress = self.phase_progress(phase)
            windows.append(
                PhaseWindow(
                    phase_id=phase.phase_id,
                    order=phase.order,
                    title=phase.title,
                    duration_months=phase.duration_months,
                    start_date=cursor,
                    end_date=end,
                    progress=progress,
                    status=self._phase_status(progress, index, current_index),
                    completed_milestones=phase.completed_milestones,
                    total_milestones=phase.total_milestones,
                )
            )
            cursor = end

        return windows

    # ------------------------------------------------------------------
    # Milestone views
    # ------------------------------------------------------------------

    def milestone_stats(self, roadmap: Roadmap) -> MilestoneStats:
        milestones = list(roadmap.iter_milestones())
        return MilestoneStats(
            total=len(milestones),
            completed=sum(1 for m in milestones if m.is_completed),
        )

    def filter_milestones(
        self,
        roadmap: Roadmap,
        completed: Optional[bool] = None,
        priority: Optional[MilestonePriority] = None,
    ) -> List[Milestone]:
        """Milestones in canonical order, optionally filtered by state and priority."""
        return [
            m for m in roadmap.iter_milestones()
            if (completed is None or m.is_completed == completed)
            and (priority is None or m.priority == priority)
        ]

    def next_milestone(self, phase: Phase) -> Optional[Milestone]:
        """First incomplete milestone of a phase, or None when it is done."""
        return next((m for m in phase.milestones if not m.is_completed), None)

    def upcoming_milestones(self, phase: Phase, limit: int = 3) -> List[Milestone]:
        return [m for m in phase.milestones if not m.is_completed][:max(limit, 0)]

    def current_phase(self, roadmap: Roadmap) -> Optional[Phase]:
        phases = roadmap.list_phases()
        if not phases:
            return None
        return phases[self.current_phase_index(roadmap)]

    # ------------------------------------------------------------------
    # Report
    # ------------------------------------------------------------------

    def build_report(self, roadmap: Roadmap) -> ProgressReport:
        report = ProgressReport(
            roadmap_id=roadmap.roadmap_id,
            phase_progress=self.all_phase_progress(roadmap),
            overall_progress=self.overall_progress(roadmap),
            current_phase_index=self.current_phase_index(roadmap),
            completed_phase_count=self.completed_phase_count(roadmap),
            remaining_months=self.remaining_months(roadmap),
            milestone_stats=self.milestone_stats(roadmap),
        )
        logger.debug(
            "Progress for roadmap '%s': overall=%.3f current_phase=%d",
            roadmap.roadmap_id, report.overall_progress, report.current_phase_index,
        )
        return report

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _is_complete(progress: float) -> bool:
        return progress >= 1.0

    def _phase_status(self, progress: float, index: int, current_index: int) -> PhaseStatus:
        if self._is_complete(progress):
            return PhaseStatus.COMPLETED
        if index == current_index:
            return PhaseStatus.CURRENT
        return PhaseStatus.UPCOMING
