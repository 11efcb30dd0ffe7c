"""
Recommendation Engine Service - Application Layer

Ranks skills and milestones for display.

Skill queries operate on a resolved skill map (AvailabilityResolverService
output) and sort by importance rank (core < important < useful). Python's
sort is stable, so ties keep the builder's canonical traversal order.

  next_learnable_skills → is_available and not is_learned
  locked_skills         → not is_available

Milestone queries read the roadmap directly:

  urgent_milestones → pending high-priority milestones, canonical order
  quick_wins        → pending milestones, fewest estimated hours first

All queries are pure and return an empty list rather than failing.
"""
import logging
from dataclasses import dataclass
from typing import Dict, List, Mapping

from domain.entities.milestone import Milestone, MilestonePriority
from domain.entities.roadmap import Roadmap
from domain.entities.skill_node import SkillNode

logger = logging.getLogger(__name__)

DEFAULT_SKILL_LIMIT = 5
DEFAULT_MILESTONE_LIMIT = 3

ALL_CATEGORIES = "all"


@dataclass
class CategoryStats:
    """Learned / total skills within one category."""

    category: str
    learned: int
    total: int

    @property
    def percentage(self) -> int:
        if self.total == 0:
            return 0
        return round(self.learned / self.total * 100)


class RecommendationEngineService:
    """Pure ranking queries over a resolved skill map and a roadmap."""

    # ------------------------------------------------------------------
    # Skill recommendations
    # ------------------------------------------------------------------

    def next_learnable_skills(
        self, skill_map: Mapping[str, SkillNode], limit: int = DEFAULT_SKILL_LIMIT
    ) -> List[SkillNode]:
        candidates = [node for node in skill_map.values() if node.is_available and not node.is_learned]
        logger.debug("%d learnable skills before limit=%d", len(candidates), limit)
        return self._rank(candidates)[:max(limit, 0)]

    def locked_skills(
        self, skill_map: Mapping[str, SkillNode], limit: int = DEFAULT_SKILL_LIMIT
    ) -> List[SkillNode]:
        candidates = [node for node in skill_map.values() if not node.is_available]
        return self._rank(candidates)[:max(limit, 0)]

    def category_stats(self, skill_map: Mapping[str, SkillNode]) -> List[CategoryStats]:
        """
        Learned/total per category, "all" first, then categories in
        first-sighting order.
        """
        nodes = list(skill_map.values())
        stats = [CategoryStats(ALL_CATEGORIES, sum(1 for n in nodes if n.is_learned), len(nodes))]

        by_category: Dict[str, CategoryStats] = {}
        for node in nodes:
            entry = by_category.setdefault(node.category, CategoryStats(node.category, 0, 0))
            entry.total += 1
            if node.is_learned:
                entry.learned += 1

        stats.extend(by_category.values())
        return stats

    def skills_by_level(self, skill_map: Mapping[str, SkillNode]) -> Dict[int, List[SkillNode]]:
        """Skills grouped by level (ascending), canonical order inside each level."""
        grouped: Dict[int, List[SkillNode]] = {}
        for node in skill_map.values():
            grouped.setdefault(node.level, []).append(node)
        return {level: grouped[level] for level in sorted(grouped)}

    # ------------------------------------------------------------------
    # Milestone recommendations
    # ------------------------------------------------------------------

    def urgent_milestones(self, roadmap: Roadmap, limit: int = DEFAULT_MILESTONE_LIMIT) -> List[Milestone]:
        pending = [
            m for m in roadmap.iter_milestones()
            if not m.is_completed and m.priority == MilestonePriority.HIGH
        ]
        return pending[:max(limit, 0)]

    def quick_wins(self, roadmap: Roadmap, limit: int = DEFAULT_MILESTONE_LIMIT) -> List[Milestone]:
        pending = [m for m in roadmap.iter_milestones() if not m.is_completed]
        pending.sort(key=lambda m: m.estimated_hours)
        return pending[:max(limit, 0)]

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _rank(nodes: List[SkillNode]) -> List[SkillNode]:
        return sorted(nodes, key=lambda n: n.importance.rank)
