"""Unit tests for ProgressAggregatorService and add_months."""
from datetime import date

import pytest

from application.dto.progress_report import PhaseStatus
from application.services.progress_aggregator import ProgressAggregatorService, add_months
from domain.entities.milestone import MilestonePriority


class TestAddMonths:
    def test_simple(self):
        assert add_months(date(2026, 1, 15), 3) == date(2026, 4, 15)

    def test_crosses_year(self):
        assert add_months(date(2026, 11, 1), 3) == date(2027, 2, 1)

    def test_clamps_day_to_month_end(self):
        assert add_months(date(2026, 1, 31), 1) == date(2026, 2, 28)
        assert add_months(date(2028, 1, 31), 1) == date(2028, 2, 29)

    def test_zero_months(self):
        assert add_months(date(2026, 5, 31), 0) == date(2026, 5, 31)


class TestPhaseAndOverallProgress:
    def setup_method(self):
        self.aggregator = ProgressAggregatorService()

    def test_mixed_phases_scenario(self, make_counted_roadmap):
        roadmap = make_counted_roadmap([2, 0, 4], [1, 0, 2])
        assert self.aggregator.all_phase_progress(roadmap) == [0.5, 0.0, 0.5]
        assert self.aggregator.overall_progress(roadmap) == pytest.approx(1 / 3)
        assert self.aggregator.current_phase_index(roadmap) == 0

    def test_empty_phase_counts_as_zero(self, make_counted_roadmap):
        roadmap = make_counted_roadmap([2, 0], [2, 0])
        assert self.aggregator.all_phase_progress(roadmap) == [1.0, 0.0]
        assert self.aggregator.current_phase_index(roadmap) == 1

    def test_overall_is_unweighted_mean(self, make_counted_roadmap):
        # 1/1 and 0/40: milestone-weighted would be ~0.024
        roadmap = make_counted_roadmap([1, 40], [1, 0])
        assert self.aggregator.overall_progress(roadmap) == pytest.approx(0.5)

    def test_current_phase_is_last_when_all_complete(self, make_counted_roadmap):
        roadmap = make_counted_roadmap([1, 2, 3], [1, 2, 3])
        assert self.aggregator.current_phase_index(roadmap) == 2
        assert self.aggregator.completed_phase_count(roadmap) == 3
        assert self.aggregator.overall_progress(roadmap) == 1.0

    def test_current_phase_skips_completed_prefix(self, make_counted_roadmap):
        roadmap = make_counted_roadmap([1, 2, 3], [1, 1, 0])
        assert self.aggregator.current_phase_index(roadmap) == 1
        assert self.aggregator.current_phase(roadmap).phase_id == "phase-1"

    def test_roadmap_without_phases(self, make_roadmap):
        roadmap = make_roadmap()
        assert self.aggregator.overall_progress(roadmap) == 0.0
        assert self.aggregator.current_phase_index(roadmap) == 0
        assert self.aggregator.current_phase(roadmap) is None
        assert self.aggregator.timeline_projection(roadmap, date(2026, 1, 1)) == []

    def test_remaining_months(self, make_counted_roadmap):
        assert self.aggregator.remaining_months(make_counted_roadmap([2, 0, 4], [1, 0, 2], duration=12)) == 8
        assert self.aggregator.remaining_months(make_counted_roadmap([4], [1], duration=6)) == 5
        assert self.aggregator.remaining_months(make_counted_roadmap([1], [1], duration=6)) == 0


class TestTimelineProjection:
    def setup_method(self):
        self.aggregator = ProgressAggregatorService()

    def test_windows_chain_declared_durations(self, make_roadmap, make_phase, make_milestone):
        roadmap = make_roadmap([
            make_phase("phase-0", 0, [make_milestone("m-1", completed=True)], duration=3),
            make_phase("phase-1", 1, [make_milestone("m-2", "phase-1")], duration=4),
            make_phase("phase-2", 2, [make_milestone("m-3", "phase-2")], duration=2),
        ])
        windows = self.aggregator.timeline_projection(roadmap, date(2026, 1, 31))

        assert [(w.start_date, w.end_date) for w in windows] == [
            (date(2026, 1, 31), date(2026, 4, 30)),
            (date(2026, 4, 30), date(2026, 8, 30)),
            (date(2026, 8, 30), date(2026, 10, 30)),
        ]
        assert [w.status for w in windows] == [
            PhaseStatus.COMPLETED, PhaseStatus.CURRENT, PhaseStatus.UPCOMING,
        ]
        assert windows[0].progress == 1.0

    def test_windows_ignore_actual_progress(self, make_counted_roadmap):
        roadmap = make_counted_roadmap([2, 2], [0, 0])
        before = self.aggregator.timeline_projection(roadmap, date(2026, 1, 1))
        for milestone in roadmap.iter_milestones():
            milestone.is_completed = True
        after = self.aggregator.timeline_projection(roadmap, date(2026, 1, 1))
        assert [(w.start_date, w.end_date) for w in before] == [(w.start_date, w.end_date) for w in after]

    def test_last_phase_current_when_all_done(self, make_counted_roadmap):
        windows = self.aggregator.timeline_projection(make_counted_roadmap([1, 1], [1, 1]), date(2026, 1, 1))
        assert [w.status for w in windows] == [PhaseStatus.COMPLETED, PhaseStatus.COMPLETED]


class TestMilestoneViews:
    def setup_method(self):
        self.aggregator = ProgressAggregatorService()

    def test_milestone_stats(self, make_counted_roadmap):
        stats = self.aggregator.milestone_stats(make_counted_roadmap([2, 0, 4], [1, 0, 2]))
        assert (stats.total, stats.completed, stats.pending) == (6, 3, 3)
        assert stats.percentage == 50

    def test_milestone_stats_empty(self, make_roadmap):
        stats = self.aggregator.milestone_stats(make_roadmap())
        assert stats.percentage == 0

    def test_filter_milestones(self, ai_roadmap):
        ai_roadmap.get_milestone("m-python").is_completed = True
        high = self.aggregator.filter_milestones(ai_roadmap, priority=MilestonePriority.HIGH)
        assert [m.milestone_id for m in high] == ["m-python", "m-dl", "m-k8s"]

        pending_high = self.aggregator.filter_milestones(
            ai_roadmap, completed=False, priority=MilestonePriority.HIGH
        )
        assert [m.milestone_id for m in pending_high] == ["m-dl", "m-k8s"]

        done = self.aggregator.filter_milestones(ai_roadmap, completed=True)
        assert [m.milestone_id for m in done] == ["m-python"]

    def test_next_and_upcoming_milestones(self, make_counted_roadmap):
        roadmap = make_counted_roadmap([5], [1])
        phase = roadmap.list_phases()[0]
        assert self.aggregator.next_milestone(phase).milestone_id == "m-0-1"
        assert [m.milestone_id for m in self.aggregator.upcoming_milestones(phase)] == [
            "m-0-1", "m-0-2", "m-0-3",
        ]
        assert len(self.aggregator.upcoming_milestones(phase, limit=10)) == 4

    def test_next_milestone_none_when_phase_done(self, make_counted_roadmap):
        phase = make_counted_roadmap([2], [2]).list_phases()[0]
        assert self.aggregator.next_milestone(phase) is None


class TestBuildReport:
    def test_report_fields(self, make_counted_roadmap):
        report = ProgressAggregatorService().build_report(make_counted_roadmap([2, 0, 4], [1, 0, 2]))
        assert report.roadmap_id == "rm-1"
        assert report.phase_progress == [0.5, 0.0, 0.5]
        assert report.current_phase_index == 0
        assert report.completed_phase_count == 0
        assert report.remaining_months == 8
        assert report.milestone_stats.completed == 3
