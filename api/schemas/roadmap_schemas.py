"""
Roadmap Schemas - API Layer
Pydantic models for roadmap progress endpoints
"""
from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class ImportanceEnum(str, Enum):
    CORE = "core"
    IMPORTANT = "important"
    USEFUL = "useful"


class PhaseStatusEnum(str, Enum):
    COMPLETED = "completed"
    CURRENT = "current"
    UPCOMING = "upcoming"


# ── Requests ──────────────────────────────────────────────────────────────────

class CompleteMilestoneRequest(BaseModel):
    """Optional body for the completion command."""
    notes: Optional[str] = Field(None, max_length=4096, description="Completion notes")

    @field_validator("notes")
    @classmethod
    def blank_notes_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            return None
        return v


# ── Responses ─────────────────────────────────────────────────────────────────

class RoadmapSummaryResponse(BaseModel):
    """Identity and shape of a loaded roadmap."""
    id: str
    title: str = ""
    target_role: str
    difficulty: str
    estimated_duration_months: int
    phase_count: int
    milestone_count: int
    total_skills: List[str]


class SkillNodeResponse(BaseModel):
    """One derived skill."""
    id: str = Field(..., description="Slug of the skill name")
    name: str
    level: int = Field(..., description="Lowest phase order introducing the skill")
    category: str
    importance: ImportanceEnum
    prerequisites: List[str]
    related_milestones: List[str]
    estimated_hours: int
    is_learned: bool
    is_available: bool


class CategoryStatsResponse(BaseModel):
    category: str
    learned: int
    total: int
    percentage: int


class SkillTreeResponse(BaseModel):
    """Full skill map plus per-category statistics."""
    roadmap_id: str
    skills: List[SkillNodeResponse]
    learned_count: int
    learnable_count: int
    locked_count: int
    categories: List[CategoryStatsResponse]


class MilestoneSummaryResponse(BaseModel):
    id: str
    phase_id: str
    title: str
    type: str
    priority: str
    estimated_hours: int
    skills: List[str]
    is_completed: bool
    completed_at: Optional[datetime] = None


class ProgressResponse(BaseModel):
    """Phase and overall completion."""
    roadmap_id: str
    phase_progress: List[float] = Field(..., description="Per-phase completion 0.0–1.0")
    overall_progress: float = Field(..., description="Unweighted mean of phase progress")
    current_phase_index: int
    completed_phase_count: int
    remaining_months: int
    total_milestones: int
    completed_milestones: int
    pending_milestones: int
    completion_percentage: int
    next_milestone: Optional[MilestoneSummaryResponse] = None


class PhaseWindowResponse(BaseModel):
    phase_id: str
    order: int
    title: str
    duration_months: int
    start_date: date
    end_date: date
    progress: float
    status: PhaseStatusEnum
    completed_milestones: int
    total_milestones: int


class TimelineResponse(BaseModel):
    roadmap_id: str
    start_date: date
    phases: List[PhaseWindowResponse]


class RecommendationsResponse(BaseModel):
    roadmap_id: str
    next_learnable_skills: List[SkillNodeResponse]
    locked_skills: List[SkillNodeResponse]
    urgent_milestones: List[MilestoneSummaryResponse]
    quick_wins: List[MilestoneSummaryResponse]


class CompletionResponse(BaseModel):
    """Result of PUT .../complete."""
    milestone_id: str
    completed_at: datetime
    overall_progress: float
    current_phase_index: int
    newly_learned_skills: List[str]
    newly_available_skills: List[str]
