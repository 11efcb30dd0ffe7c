"""
Availability Resolver Service - Application Layer

Computes learned / available state for every skill from the current set of
completed milestone ids.

  is_learned(s)   ⇔ any of s.related_milestone_ids is completed
                    (one completed milestone is enough, even when the
                    skill is spread over several milestones)
  is_available(s) ⇔ s has no prerequisites, or every prerequisite names a
                    skill in this map whose is_learned is True

A prerequisite that does not exist anywhere in the map can never be
learned, so the dependent skill stays locked for the lifetime of the
roadmap.

Pure: inputs are not mutated, fresh SkillNode copies are returned.
"""
import logging
from dataclasses import replace
from typing import AbstractSet, Dict, List, Mapping

from domain.entities.skill_node import SkillNode

logger = logging.getLogger(__name__)


class AvailabilityResolverService:
    """Resolves is_learned / is_available for a skill map."""

    def resolve(
        self,
        skill_map: Mapping[str, SkillNode],
        completed_milestone_ids: AbstractSet[str],
    ) -> Dict[str, SkillNode]:
        """
        Return a new skill map with derived flags filled in.

        Args:
            skill_map:               Output of SkillGraphBuilderService.build().
            completed_milestone_ids: Snapshot of completed milestone ids.

        Returns:
            New dict in the same key order; the input map is untouched.
        """
        learned = {
            name: any(mid in completed_milestone_ids for mid in node.related_milestone_ids)
            for name, node in skill_map.items()
        }

        resolved: Dict[str, SkillNode] = {}
        for name, node in skill_map.items():
            resolved[name] = replace(
                node,
                prerequisites=list(node.prerequisites),
                related_milestone_ids=list(node.related_milestone_ids),
                is_learned=learned[name],
                is_available=self._prerequisites_met(node, learned),
            )

        logger.debug(
            "Resolved availability: %d learned, %d available of %d skills",
            sum(1 for n in resolved.values() if n.is_learned),
            sum(1 for n in resolved.values() if n.is_available),
            len(resolved),
        )
        return resolved

    def unsatisfiable_prerequisites(self, skill_map: Mapping[str, SkillNode]) -> Dict[str, List[str]]:
        """
        Skills whose prerequisite list names a skill absent from the map.

        Returns skill name → missing prerequisite names. These skills are
        permanently locked.
        """
        missing: Dict[str, List[str]] = {}
        for name, node in skill_map.items():
            absent = [p for p in node.prerequisites if p not in skill_map]
            if absent:
                missing[name] = absent
        return missing

    @staticmethod
    def _prerequisites_met(node: SkillNode, learned: Mapping[str, bool]) -> bool:
        if not node.prerequisites:
            return True
        # learned.get() is False for names outside the map
        return all(learned.get(prereq, False) for prereq in node.prerequisites)
