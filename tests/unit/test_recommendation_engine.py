"""Unit tests for RecommendationEngineService."""
from application.services.availability_resolver import AvailabilityResolverService
from application.services.recommendation_engine import ALL_CATEGORIES, RecommendationEngineService
from application.services.skill_graph_builder import SkillGraphBuilderService
from domain.entities.skill_node import SkillImportance, SkillNode


def resolved_map(roadmap):
    skill_map = SkillGraphBuilderService().build(roadmap)
    return AvailabilityResolverService().resolve(skill_map, roadmap.completed_milestone_ids())


def names(nodes):
    return [n.name for n in nodes]


class TestSkillRecommendations:
    def setup_method(self):
        self.engine = RecommendationEngineService()

    def test_next_learnable_ranked_by_importance(self, ai_roadmap):
        result = self.engine.next_learnable_skills(resolved_map(ai_roadmap))
        assert names(result) == ["Python", "SQL", "Git", "Docker"]

    def test_learned_skills_drop_out(self, ai_roadmap):
        ai_roadmap.get_milestone("m-python").is_completed = True
        result = self.engine.next_learnable_skills(resolved_map(ai_roadmap))
        assert "Python" not in names(result)

    def test_next_learnable_never_includes_unavailable(self, ai_roadmap):
        for milestone_id in ("m-python", "m-dl"):
            ai_roadmap.get_milestone(milestone_id).is_completed = True
        result = self.engine.next_learnable_skills(resolved_map(ai_roadmap), limit=50)
        assert all(node.is_available and not node.is_learned for node in result)
        assert "TensorFlow" in names(result)
        assert "딥러닝" not in names(result)

    def test_limit_truncates_after_sort(self, ai_roadmap):
        assert names(self.engine.next_learnable_skills(resolved_map(ai_roadmap), limit=2)) == ["Python", "SQL"]
        assert self.engine.next_learnable_skills(resolved_map(ai_roadmap), limit=0) == []

    def test_stable_sort_keeps_canonical_order_on_ties(self):
        skill_map = {
            name: SkillNode(name=name, level=0, importance=importance, is_available=True)
            for name, importance in [
                ("u1", SkillImportance.USEFUL),
                ("c1", SkillImportance.CORE),
                ("u2", SkillImportance.USEFUL),
                ("i1", SkillImportance.IMPORTANT),
                ("c2", SkillImportance.CORE),
            ]
        }
        assert names(self.engine.next_learnable_skills(skill_map)) == ["c1", "c2", "i1", "u1", "u2"]

    def test_locked_skills(self, ai_roadmap):
        assert names(self.engine.locked_skills(resolved_map(ai_roadmap))) == [
            "딥러닝", "TensorFlow", "Kubernetes",
        ]

    def test_empty_map(self):
        assert self.engine.next_learnable_skills({}) == []
        assert self.engine.locked_skills({}) == []


class TestSkillStatistics:
    def setup_method(self):
        self.engine = RecommendationEngineService()

    def test_category_stats(self, ai_roadmap):
        ai_roadmap.get_milestone("m-sql").is_completed = True
        stats = self.engine.category_stats(resolved_map(ai_roadmap))

        assert [s.category for s in stats] == [ALL_CATEGORIES, "Programming", "Data", "Tools", "AI/ML"]
        overall = stats[0]
        assert (overall.learned, overall.total) == (2, 7)
        tools = stats[3]
        assert (tools.learned, tools.total, tools.percentage) == (1, 3, 33)

    def test_category_stats_empty(self):
        stats = RecommendationEngineService().category_stats({})
        assert len(stats) == 1
        assert stats[0].percentage == 0

    def test_skills_by_level(self, ai_roadmap):
        grouped = self.engine.skills_by_level(resolved_map(ai_roadmap))
        assert list(grouped) == [0, 1, 2]
        assert names(grouped[0]) == ["Python", "SQL", "Git"]
        assert names(grouped[1]) == ["딥러닝", "Docker"]


class TestMilestoneRecommendations:
    def setup_method(self):
        self.engine = RecommendationEngineService()

    def test_urgent_milestones(self, ai_roadmap):
        ai_roadmap.get_milestone("m-python").is_completed = True
        urgent = self.engine.urgent_milestones(ai_roadmap)
        assert [m.milestone_id for m in urgent] == ["m-dl", "m-k8s"]

    def test_quick_wins_shortest_first(self, ai_roadmap):
        wins = self.engine.quick_wins(ai_roadmap)
        assert [m.milestone_id for m in wins] == ["m-sql", "m-docker", "m-k8s"]

    def test_quick_wins_skip_completed(self, ai_roadmap):
        ai_roadmap.get_milestone("m-sql").is_completed = True
        wins = self.engine.quick_wins(ai_roadmap, limit=1)
        assert [m.milestone_id for m in wins] == ["m-docker"]
