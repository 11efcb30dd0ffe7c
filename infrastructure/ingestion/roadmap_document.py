"""
Roadmap Document Ingestion - Infrastructure Layer

Validates the untyped roadmap payload produced by the external generation
step and converts it into the domain Roadmap aggregate. Nothing malformed
crosses this boundary: Pydantic errors are re-raised as domain
ValidationError carrying the offending field path.

The document uses the generator's camelCase keys:

    {
      "id": "rm-1", "targetRole": "AI 개발자", "difficulty": "BEGINNER",
      "estimatedDuration": 12,
      "personalizedFor": {"learningStyle": "visual", "timeCommitment": "10-15h/week"},
      "phases": [
        {"id": "phase-1", "order": 0, "title": "...", "duration": 3,
         "milestones": [
           {"id": "m-1", "type": "skill", "priority": "high", "title": "...",
            "estimatedHours": 40, "skills": ["Python"], "resources": [...],
            "successCriteria": [...], "isCompleted": false}
         ]}
      ]
    }
"""
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

import pydantic
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from domain.entities.milestone import (
    Milestone,
    MilestonePriority,
    MilestoneType,
    Resource,
    ResourceCost,
    ResourceType,
)
from domain.entities.phase import Phase
from domain.entities.roadmap import LearningStyle, Personalization, Roadmap, RoadmapDifficulty
from domain.exceptions.domain_exceptions import ValidationError
from infrastructure.config.engine_config import DEFAULT_MILESTONE_HOURS
from infrastructure.logging.structured_logger import get_logger

logger = get_logger(__name__)


class _DocumentModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class ResourceDocument(_DocumentModel):
    type: ResourceType = ResourceType.COURSE
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    url: Optional[str] = None
    provider: Optional[str] = None
    cost: ResourceCost = ResourceCost.FREE
    rating: Optional[float] = Field(None, ge=0, le=5)


class MilestoneDocument(_DocumentModel):
    id: str = Field(..., min_length=1)
    phase_id: Optional[str] = Field(None, alias="phaseId")
    title: str = Field(..., min_length=1)
    description: str = ""
    type: MilestoneType = MilestoneType.SKILL
    priority: MilestonePriority = MilestonePriority.MEDIUM
    estimated_hours: Optional[int] = Field(None, ge=0, alias="estimatedHours")
    skills: List[str] = Field(default_factory=list)
    resources: List[ResourceDocument] = Field(default_factory=list)
    success_criteria: List[str] = Field(default_factory=list, alias="successCriteria")
    is_completed: bool = Field(False, alias="isCompleted")
    completed_at: Optional[datetime] = Field(None, alias="completedAt")
    completion_notes: Optional[str] = Field(None, alias="completionNotes")

    @field_validator("skills")
    @classmethod
    def strip_skill_names(cls, v: List[str]) -> List[str]:
        names = [s.strip() for s in v]
        if any(not s for s in names):
            raise ValueError("skill names cannot be empty")
        return names


class PhaseDocument(_DocumentModel):
    id: str = Field(..., min_length=1)
    order: Optional[int] = Field(None, ge=0)
    title: str = Field(..., min_length=1)
    description: str = ""
    duration_months: int = Field(0, ge=0, validation_alias=AliasChoices("duration", "durationMonths"))
    milestones: List[MilestoneDocument] = Field(default_factory=list)


class PersonalizationDocument(_DocumentModel):
    learning_style: LearningStyle = Field(LearningStyle.VISUAL, alias="learningStyle")
    time_commitment: str = Field("", alias="timeCommitment")


class RoadmapDocument(_DocumentModel):
    id: str = Field(..., min_length=1)
    title: str = ""
    description: str = ""
    target_role: str = Field(..., min_length=1, alias="targetRole")
    difficulty: RoadmapDifficulty = RoadmapDifficulty.BEGINNER
    estimated_duration_months: int = Field(
        0, ge=0, validation_alias=AliasChoices("estimatedDuration", "estimatedDurationMonths")
    )
    phases: List[PhaseDocument] = Field(default_factory=list)
    personalized_for: Optional[PersonalizationDocument] = Field(None, alias="personalizedFor")

    @field_validator("difficulty", mode="before")
    @classmethod
    def normalise_difficulty(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v


# ---------------------------------------------------------------------------
# Conversion
# ---------------------------------------------------------------------------

def parse_roadmap(
    payload: Mapping[str, Any],
    default_milestone_hours: int = DEFAULT_MILESTONE_HOURS,
) -> Roadmap:
    """
    Validate a raw payload and build the Roadmap aggregate.

    Raises:
        ValidationError: For any schema or structural violation.
    """
    try:
        document = RoadmapDocument.model_validate(payload)
    except pydantic.ValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(loc) for loc in first["loc"]) or "document"
        logger.warning("Roadmap document rejected", field=field, error_count=exc.error_count())
        raise ValidationError(field, first["msg"]) from exc

    return document_to_roadmap(document, default_milestone_hours)


def document_to_roadmap(
    document: RoadmapDocument,
    default_milestone_hours: int = DEFAULT_MILESTONE_HOURS,
) -> Roadmap:
    """Convert an already-validated RoadmapDocument into the domain aggregate."""
    phases = [
        _to_phase(phase_doc, index, default_milestone_hours)
        for index, phase_doc in enumerate(document.phases)
    ]
    personalization = (
        Personalization(
            learning_style=document.personalized_for.learning_style,
            time_commitment=document.personalized_for.time_commitment,
        )
        if document.personalized_for
        else Personalization()
    )

    roadmap = Roadmap(
        roadmap_id=document.id,
        target_role=document.target_role,
        difficulty=document.difficulty,
        estimated_duration_months=document.estimated_duration_months,
        phases=tuple(phases),
        personalization=personalization,
        title=document.title,
        description=document.description,
    )
    logger.log_roadmap_loaded(
        roadmap.roadmap_id,
        phase_count=len(roadmap.phases),
        milestone_count=roadmap.total_milestones,
        skill_count=len(roadmap.total_skill_names()),
    )
    return roadmap


def _to_phase(doc: PhaseDocument, index: int, default_hours: int) -> Phase:
    milestones = [
        Milestone(
            milestone_id=m.id,
            phase_id=m.phase_id or doc.id,
            title=m.title,
            milestone_type=m.type,
            priority=m.priority,
            description=m.description,
            estimated_hours=default_hours if m.estimated_hours is None else m.estimated_hours,
            skills=tuple(m.skills),
            resources=tuple(_to_resource(r) for r in m.resources),
            success_criteria=tuple(m.success_criteria),
            is_completed=m.is_completed,
            completed_at=m.completed_at,
            completion_notes=m.completion_notes,
        )
        for m in doc.milestones
    ]
    return Phase(
        phase_id=doc.id,
        order=index if doc.order is None else doc.order,
        title=doc.title,
        duration_months=doc.duration_months,
        description=doc.description,
        milestones=tuple(milestones),
    )


def _to_resource(doc: ResourceDocument) -> Resource:
    return Resource(
        resource_type=doc.type,
        title=doc.title,
        cost=doc.cost,
        description=doc.description,
        url=doc.url,
        provider=doc.provider,
        rating=doc.rating,
    )


# ---------------------------------------------------------------------------
# Serialisation (for the external persistence collaborator)
# ---------------------------------------------------------------------------

def roadmap_to_document(roadmap: Roadmap) -> Dict[str, Any]:
    """Dump the aggregate, including completion state, in the generator's key style."""
    return {
        "id": roadmap.roadmap_id,
        "title": roadmap.title,
        "description": roadmap.description,
        "targetRole": roadmap.target_role,
        "difficulty": roadmap.difficulty.value,
        "estimatedDuration": roadmap.estimated_duration_months,
        "personalizedFor": {
            "learningStyle": roadmap.personalization.learning_style.value,
            "timeCommitment": roadmap.personalization.time_commitment,
        },
        "phases": [
            {
                "id": phase.phase_id,
                "order": phase.order,
                "title": phase.title,
                "description": phase.description,
                "duration": phase.duration_months,
                "milestones": [_milestone_to_document(m) for m in phase.milestones],
            }
            for phase in roadmap.list_phases()
        ],
    }


def _milestone_to_document(milestone: Milestone) -> Dict[str, Any]:
    return {
        "id": milestone.milestone_id,
        "phaseId": milestone.phase_id,
        "title": milestone.title,
        "description": milestone.description,
        "type": milestone.milestone_type.value,
        "priority": milestone.priority.value,
        "estimatedHours": milestone.estimated_hours,
        "skills": list(milestone.skills),
        "resources": [
            {
                "type": r.resource_type.value,
                "title": r.title,
                "description": r.description,
                "url": r.url,
                "provider": r.provider,
                "cost": r.cost.value,
                "rating": r.rating,
            }
            for r in milestone.resources
        ],
        "successCriteria": list(milestone.success_criteria),
        "isCompleted": milestone.is_completed,
        "completedAt": milestone.completed_at.isoformat() if milestone.completed_at else None,
        "completionNotes": milestone.completion_notes,
    }
