"""
Skill Graph Builder Service - Application Layer

Derives the skill-name → SkillNode map from a Roadmap aggregate.

Traversal order is phases ascending, then milestones in declared order,
then each milestone's skills in declared order. The returned dict keeps
that first-sighting order; every later "stable sort" in the engine uses it
as the tie-break.

Aggregation rules:
  - level           = order of the first phase that mentions the skill
                      (phases are walked ascending, so this is the minimum)
  - estimated_hours = sum of estimated_hours over every referencing
                      milestone; a milestone's hours are attributed in full
                      to each of its skills, never split
  - related ids     = every referencing milestone, in traversal order

Category, importance and prerequisites come from the injected
SkillTaxonomy. The builder never fails: unknown skills fall back to the
most permissive classification.

This service does NOT read completion state; see AvailabilityResolverService.
"""
import logging
from typing import Dict, Optional

from domain.entities.roadmap import Roadmap
from domain.entities.skill_node import SkillNode
from domain.value_objects.skill_taxonomy import SkillTaxonomy

logger = logging.getLogger(__name__)


class SkillGraphBuilderService:
    """
    Builds the skill graph for a roadmap.

    Usage:
        builder = SkillGraphBuilderService(SkillTaxonomy.default())
        skill_map = builder.build(roadmap)
    """

    def __init__(self, taxonomy: Optional[SkillTaxonomy] = None) -> None:
        self._taxonomy = taxonomy or SkillTaxonomy.default()

    @property
    def taxonomy(self) -> SkillTaxonomy:
        return self._taxonomy

    def build(self, roadmap: Roadmap) -> Dict[str, SkillNode]:
        """
        Build the skill map for a roadmap.

        Args:
            roadmap: Validated Roadmap aggregate.

        Returns:
            Insertion-ordered dict of skill name → SkillNode, with
            is_learned / is_available left False.
        """
        skill_map: Dict[str, SkillNode] = {}

        for phase in roadmap.list_phases():
            for milestone in phase.milestones:
                for skill in milestone.skills:
                    node = skill_map.get(skill)
                    if node is None:
                        skill_map[skill] = self._new_node(skill, phase.order, milestone.estimated_hours)
                        skill_map[skill].related_milestone_ids.append(milestone.milestone_id)
                        continue

                    node.estimated_hours += milestone.estimated_hours
                    node.related_milestone_ids.append(milestone.milestone_id)

        logger.info(
            "Built skill graph for roadmap '%s': %d skills across %d phases",
            roadmap.roadmap_id, len(skill_map), len(roadmap.phases),
        )
        return skill_map

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _new_node(self, skill: str, level: int, hours: int) -> SkillNode:
        prerequisites = self._taxonomy.prerequisites_of(skill)
        node = SkillNode(
            name=skill,
            level=level,
            category=self._taxonomy.categorize(skill),
            importance=self._taxonomy.importance_of(skill),
            prerequisites=prerequisites,
            estimated_hours=hours,
        )
        if prerequisites:
            logger.debug("Skill '%s' requires %s", skill, prerequisites)
        return node
