"""
Skill Node - Clean Architecture Domain Layer
Derived, never-persisted view of a skill within one roadmap
"""
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List


class SkillImportance(Enum):
    """Importance tier used to rank recommendations"""
    CORE = "core"
    IMPORTANT = "important"
    USEFUL = "useful"

    @property
    def rank(self) -> int:
        """Lower rank = higher priority"""
        return _IMPORTANCE_RANK[self]


_IMPORTANCE_RANK = {
    SkillImportance.CORE: 0,
    SkillImportance.IMPORTANT: 1,
    SkillImportance.USEFUL: 2,
}

DEFAULT_CATEGORY = "Other"


@dataclass
class SkillNode:
    """
    Skill derived from the milestones that reference it.

    Built by SkillGraphBuilderService; is_learned / is_available are filled
    in by AvailabilityResolverService on a fresh copy.
    """
    name: str
    level: int
    category: str = DEFAULT_CATEGORY
    importance: SkillImportance = SkillImportance.USEFUL
    prerequisites: List[str] = field(default_factory=list)
    related_milestone_ids: List[str] = field(default_factory=list)
    estimated_hours: int = 0
    is_learned: bool = False
    is_available: bool = False

    @property
    def skill_id(self) -> str:
        """URL-friendly slug of the skill name"""
        return re.sub(r"\s+", "-", self.name.lower())

    @property
    def is_learnable(self) -> bool:
        """Unlocked but not yet learned"""
        return self.is_available and not self.is_learned

    def __str__(self) -> str:
        return f"SkillNode({self.name}, level={self.level}, {self.importance.value})"
