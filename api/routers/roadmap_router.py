"""
Roadmap Router - /api/v1/roadmaps

POST /roadmaps                                          → load a generated roadmap document
GET  /roadmaps/{roadmap_id}                             → roadmap summary
GET  /roadmaps/{roadmap_id}/skills                      → resolved skill tree + category stats
GET  /roadmaps/{roadmap_id}/progress                    → phase / overall progress
GET  /roadmaps/{roadmap_id}/timeline                    → planned phase windows
GET  /roadmaps/{roadmap_id}/recommendations             → next skills, locked skills, milestones
PUT  /roadmaps/{roadmap_id}/milestones/{milestone_id}/complete → complete a milestone
"""
from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Query, status

from api.dependencies.dependency_injection import (
    get_engine_config,
    get_roadmap_store,
    get_use_case,
)
from api.schemas.error_schemas import (
    AlreadyCompletedErrorResponse,
    NotFoundErrorResponse,
    ValidationErrorResponse,
)
from api.schemas.roadmap_schemas import (
    CategoryStatsResponse,
    CompleteMilestoneRequest,
    CompletionResponse,
    ImportanceEnum,
    MilestoneSummaryResponse,
    PhaseStatusEnum,
    PhaseWindowResponse,
    ProgressResponse,
    RecommendationsResponse,
    RoadmapSummaryResponse,
    SkillNodeResponse,
    SkillTreeResponse,
    TimelineResponse,
)
from application.services.progress_aggregator import ProgressAggregatorService
from application.services.recommendation_engine import RecommendationEngineService
from application.use_cases.track_roadmap_progress_use_case import TrackRoadmapProgressUseCase
from domain.entities.milestone import Milestone
from domain.entities.roadmap import Roadmap
from domain.entities.skill_node import SkillNode
from infrastructure.config.engine_config import EngineConfig
from infrastructure.ingestion.roadmap_document import parse_roadmap
from infrastructure.logging.structured_logger import get_logger
from infrastructure.persistence.in_memory_roadmap_store import InMemoryRoadmapStore

router = APIRouter()
logger = get_logger("api.roadmaps")

_aggregator = ProgressAggregatorService()
_recommender = RecommendationEngineService()


# ---------------------------------------------------------------------------
# Mapping helpers
# ---------------------------------------------------------------------------

def _summary(roadmap: Roadmap) -> RoadmapSummaryResponse:
    return RoadmapSummaryResponse(
        id=roadmap.roadmap_id,
        title=roadmap.title,
        target_role=roadmap.target_role,
        difficulty=roadmap.difficulty.value,
        estimated_duration_months=roadmap.estimated_duration_months,
        phase_count=len(roadmap.phases),
        milestone_count=roadmap.total_milestones,
        total_skills=roadmap.total_skill_names(),
    )


def _skill(node: SkillNode) -> SkillNodeResponse:
    return SkillNodeResponse(
        id=node.skill_id,
        name=node.name,
        level=node.level,
        category=node.category,
        importance=ImportanceEnum(node.importance.value),
        prerequisites=list(node.prerequisites),
        related_milestones=list(node.related_milestone_ids),
        estimated_hours=node.estimated_hours,
        is_learned=node.is_learned,
        is_available=node.is_available,
    )


def _milestone(milestone: Milestone) -> MilestoneSummaryResponse:
    return MilestoneSummaryResponse(
        id=milestone.milestone_id,
        phase_id=milestone.phase_id,
        title=milestone.title,
        type=milestone.milestone_type.value,
        priority=milestone.priority.value,
        estimated_hours=milestone.estimated_hours,
        skills=list(milestone.skills),
        is_completed=milestone.is_completed,
        completed_at=milestone.completed_at,
    )


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

@router.post(
    "/roadmaps",
    response_model=RoadmapSummaryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Load a generated roadmap document",
    responses={422: {"model": ValidationErrorResponse}},
)
def create_roadmap(
    payload: Dict[str, Any] = Body(..., description="Roadmap document in the generator's camelCase format"),
    config: EngineConfig = Depends(get_engine_config),
    store: InMemoryRoadmapStore = Depends(get_roadmap_store),
):
    roadmap = parse_roadmap(payload, default_milestone_hours=config.default_milestone_hours)
    store.save(roadmap)
    return _summary(roadmap)


@router.get(
    "/roadmaps/{roadmap_id}",
    response_model=RoadmapSummaryResponse,
    summary="Get a roadmap summary",
)
def get_roadmap(
    roadmap_id: str,
    store: InMemoryRoadmapStore = Depends(get_roadmap_store),
):
    return _summary(store.get(roadmap_id))


@router.get(
    "/roadmaps/{roadmap_id}/skills",
    response_model=SkillTreeResponse,
    summary="Get the resolved skill tree",
)
def get_skills(
    roadmap_id: str,
    store: InMemoryRoadmapStore = Depends(get_roadmap_store),
    use_case: TrackRoadmapProgressUseCase = Depends(get_use_case),
):
    skill_map = use_case.skill_map(store.get(roadmap_id))
    nodes = list(skill_map.values())
    return SkillTreeResponse(
        roadmap_id=roadmap_id,
        skills=[_skill(n) for n in nodes],
        learned_count=sum(1 for n in nodes if n.is_learned),
        learnable_count=sum(1 for n in nodes if n.is_learnable),
        locked_count=sum(1 for n in nodes if not n.is_available),
        categories=[
            CategoryStatsResponse(
                category=s.category, learned=s.learned, total=s.total, percentage=s.percentage
            )
            for s in _recommender.category_stats(skill_map)
        ],
    )


@router.get(
    "/roadmaps/{roadmap_id}/progress",
    response_model=ProgressResponse,
    summary="Get phase and overall progress",
)
def get_progress(
    roadmap_id: str,
    store: InMemoryRoadmapStore = Depends(get_roadmap_store),
    use_case: TrackRoadmapProgressUseCase = Depends(get_use_case),
):
    roadmap = store.get(roadmap_id)
    report = use_case.progress(roadmap)
    current = _aggregator.current_phase(roadmap)
    upcoming = _aggregator.next_milestone(current) if current is not None else None
    stats = report.milestone_stats
    return ProgressResponse(
        roadmap_id=roadmap_id,
        phase_progress=report.phase_progress,
        overall_progress=report.overall_progress,
        current_phase_index=report.current_phase_index,
        completed_phase_count=report.completed_phase_count,
        remaining_months=report.remaining_months,
        total_milestones=stats.total,
        completed_milestones=stats.completed,
        pending_milestones=stats.pending,
        completion_percentage=stats.percentage,
        next_milestone=_milestone(upcoming) if upcoming is not None else None,
    )


@router.get(
    "/roadmaps/{roadmap_id}/timeline",
    response_model=TimelineResponse,
    summary="Get the planned phase timeline",
)
def get_timeline(
    roadmap_id: str,
    start_date: Optional[date] = Query(None, description="Timeline start (defaults to today)"),
    store: InMemoryRoadmapStore = Depends(get_roadmap_store),
    use_case: TrackRoadmapProgressUseCase = Depends(get_use_case),
):
    start = start_date or date.today()
    windows = use_case.timeline(store.get(roadmap_id), start)
    return TimelineResponse(
        roadmap_id=roadmap_id,
        start_date=start,
        phases=[
            PhaseWindowResponse(
                phase_id=w.phase_id,
                order=w.order,
                title=w.title,
                duration_months=w.duration_months,
                start_date=w.start_date,
                end_date=w.end_date,
                progress=w.progress,
                status=PhaseStatusEnum(w.status.value),
                completed_milestones=w.completed_milestones,
                total_milestones=w.total_milestones,
            )
            for w in windows
        ],
    )


@router.get(
    "/roadmaps/{roadmap_id}/recommendations",
    response_model=RecommendationsResponse,
    summary="Get ranked skill and milestone recommendations",
)
def get_recommendations(
    roadmap_id: str,
    skill_limit: Optional[int] = Query(None, ge=1, le=50),
    milestone_limit: Optional[int] = Query(None, ge=1, le=20),
    config: EngineConfig = Depends(get_engine_config),
    store: InMemoryRoadmapStore = Depends(get_roadmap_store),
    use_case: TrackRoadmapProgressUseCase = Depends(get_use_case),
):
    view = use_case.recommendations(
        store.get(roadmap_id),
        skill_limit=skill_limit or config.recommendation_limit,
        milestone_limit=milestone_limit or config.quick_win_limit,
    )
    return RecommendationsResponse(
        roadmap_id=roadmap_id,
        next_learnable_skills=[_skill(n) for n in view.next_learnable_skills],
        locked_skills=[_skill(n) for n in view.locked_skills],
        urgent_milestones=[_milestone(m) for m in view.urgent_milestones],
        quick_wins=[_milestone(m) for m in view.quick_wins],
    )


@router.put(
    "/roadmaps/{roadmap_id}/milestones/{milestone_id}/complete",
    response_model=CompletionResponse,
    summary="Mark a milestone as completed",
    responses={
        404: {"model": NotFoundErrorResponse},
        409: {"model": AlreadyCompletedErrorResponse},
    },
)
def complete_milestone(
    roadmap_id: str,
    milestone_id: str,
    body: Optional[CompleteMilestoneRequest] = None,
    store: InMemoryRoadmapStore = Depends(get_roadmap_store),
    use_case: TrackRoadmapProgressUseCase = Depends(get_use_case),
):
    roadmap = store.get(roadmap_id)
    outcome = use_case.complete_milestone(roadmap, milestone_id, notes=body.notes if body else None)
    record = outcome.record
    logger.log_milestone_completed(roadmap_id, record.milestone_id, record.completed_at)
    return CompletionResponse(
        milestone_id=record.milestone_id,
        completed_at=record.completed_at,
        overall_progress=outcome.progress.overall_progress,
        current_phase_index=outcome.progress.current_phase_index,
        newly_learned_skills=outcome.newly_learned_skills,
        newly_available_skills=outcome.newly_available_skills,
    )
