"""
Shared fixtures for unit and integration tests.

Factories are exposed as fixtures returning callables so each test can build
exactly the roadmap shape it needs.
"""
from datetime import datetime, timezone

import pytest

from domain.entities.milestone import Milestone, MilestonePriority, MilestoneType
from domain.entities.phase import Phase
from domain.entities.roadmap import Roadmap, RoadmapDifficulty

FIXED_NOW = datetime(2026, 3, 1, 9, 30, tzinfo=timezone.utc)


# ===========================================================================
# Helpers / Factories
# ===========================================================================

def build_milestone(
    milestone_id,
    phase_id="phase-0",
    skills=(),
    hours=20,
    priority=MilestonePriority.MEDIUM,
    milestone_type=MilestoneType.SKILL,
    completed=False,
) -> Milestone:
    return Milestone(
        milestone_id=milestone_id,
        phase_id=phase_id,
        title=f"Milestone {milestone_id}",
        milestone_type=milestone_type,
        priority=priority,
        estimated_hours=hours,
        skills=tuple(skills),
        is_completed=completed,
        completed_at=FIXED_NOW if completed else None,
    )


def build_phase(phase_id, order, milestones=(), duration=3) -> Phase:
    return Phase(
        phase_id=phase_id,
        order=order,
        title=f"Phase {order}",
        duration_months=duration,
        milestones=tuple(milestones),
    )


def build_roadmap(phases=(), roadmap_id="rm-1", duration=12) -> Roadmap:
    return Roadmap(
        roadmap_id=roadmap_id,
        target_role="AI 개발자",
        difficulty=RoadmapDifficulty.BEGINNER,
        estimated_duration_months=duration,
        phases=tuple(phases),
    )


def build_counted_roadmap(totals, completed, duration=12) -> Roadmap:
    """Roadmap whose phase i has totals[i] milestones, the first completed[i] of them done."""
    phases = []
    for order, (total, done) in enumerate(zip(totals, completed)):
        phase_id = f"phase-{order}"
        phases.append(
            build_phase(
                phase_id,
                order,
                [
                    build_milestone(f"m-{order}-{i}", phase_id, completed=i < done)
                    for i in range(total)
                ],
            )
        )
    return build_roadmap(phases, duration=duration)


@pytest.fixture
def make_milestone():
    return build_milestone


@pytest.fixture
def make_phase():
    return build_phase


@pytest.fixture
def make_roadmap():
    return build_roadmap


@pytest.fixture
def make_counted_roadmap():
    return build_counted_roadmap


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture
def ai_roadmap() -> Roadmap:
    """
    Three-phase AI roadmap with the default taxonomy in mind.

    머신러닝 never appears, so 딥러닝 (requires 머신러닝 + Python) is locked
    for good.
    """
    return build_roadmap(
        [
            build_phase("phase-0", 0, [
                build_milestone("m-python", "phase-0", ["Python"], hours=40, priority=MilestonePriority.HIGH),
                build_milestone("m-sql", "phase-0", ["SQL", "Git"], hours=10),
            ]),
            build_phase("phase-1", 1, [
                build_milestone("m-dl", "phase-1", ["딥러닝"], hours=60, priority=MilestonePriority.HIGH),
                build_milestone("m-docker", "phase-1", ["Docker", "Python"], hours=15, priority=MilestonePriority.LOW),
            ]),
            build_phase("phase-2", 2, [
                build_milestone("m-tf", "phase-2", ["TensorFlow"], hours=30),
                build_milestone("m-k8s", "phase-2", ["Kubernetes"], hours=25, priority=MilestonePriority.HIGH),
            ]),
        ],
        roadmap_id="rm-ai",
    )


@pytest.fixture
def roadmap_payload() -> dict:
    """Generator-style camelCase document."""
    return {
        "id": "rm-doc",
        "title": "AI Engineer Roadmap",
        "targetRole": "AI 개발자",
        "difficulty": "beginner",
        "estimatedDuration": 6,
        "personalizedFor": {"learningStyle": "visual", "timeCommitment": "10-15h/week"},
        "phases": [
            {
                "id": "phase-a",
                "order": 0,
                "title": "Foundations",
                "duration": 3,
                "milestones": [
                    {
                        "id": "m-py",
                        "type": "skill",
                        "priority": "high",
                        "title": "Learn Python",
                        "estimatedHours": 40,
                        "skills": ["Python"],
                        "resources": [
                            {"type": "course", "title": "Python 101", "cost": "free", "rating": 4.5}
                        ],
                        "successCriteria": ["Write a CLI tool"],
                    },
                    {
                        "id": "m-git",
                        "type": "project",
                        "priority": "medium",
                        "title": "Version control",
                        "skills": ["Git"],
                    },
                ],
            },
            {
                "id": "phase-b",
                "order": 1,
                "title": "Deep learning",
                "duration": 3,
                "milestones": [
                    {
                        "id": "m-dl",
                        "type": "skill",
                        "priority": "high",
                        "title": "Neural networks",
                        "estimatedHours": 60,
                        "skills": ["딥러닝"],
                    }
                ],
            },
        ],
    }
