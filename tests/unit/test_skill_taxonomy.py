"""Unit tests for SkillTaxonomy classification tables."""
import pytest

from domain.entities.skill_node import DEFAULT_CATEGORY, SkillImportance
from domain.value_objects.skill_taxonomy import SkillTaxonomy, names_match


class TestNamesMatch:
    def test_either_direction(self):
        assert names_match("PostgreSQL", "SQL")
        assert names_match("SQL", "PostgreSQL")
        assert not names_match("Rust", "Python")


class TestDefaultTaxonomy:
    def setup_method(self):
        self.taxonomy = SkillTaxonomy.default()

    def test_categorize(self):
        assert self.taxonomy.categorize("Python") == "Programming"
        assert self.taxonomy.categorize("딥러닝") == "AI/ML"
        assert self.taxonomy.categorize("SQL") == "Data"
        assert self.taxonomy.categorize("Docker") == "Tools"
        assert self.taxonomy.categorize("선형대수") == "Math"

    def test_categorize_substring_match(self):
        assert self.taxonomy.categorize("Python 기초") == "Programming"

    def test_unknown_skill_falls_back(self):
        assert self.taxonomy.categorize("Basket Weaving") == DEFAULT_CATEGORY
        assert self.taxonomy.importance_of("Basket Weaving") == SkillImportance.USEFUL
        assert self.taxonomy.prerequisites_of("Basket Weaving") == []

    def test_importance_tiers(self):
        assert self.taxonomy.importance_of("Python") == SkillImportance.CORE
        assert self.taxonomy.importance_of("딥러닝") == SkillImportance.IMPORTANT
        assert self.taxonomy.importance_of("Docker") == SkillImportance.USEFUL

    def test_prerequisites(self):
        assert self.taxonomy.prerequisites_of("딥러닝") == ["머신러닝", "Python"]
        assert self.taxonomy.prerequisites_of("Kubernetes") == ["Docker"]
        assert self.taxonomy.prerequisites_of("Python") == []

    def test_prerequisites_returns_fresh_list(self):
        self.taxonomy.prerequisites_of("Kubernetes").append("Helm")
        assert self.taxonomy.prerequisites_of("Kubernetes") == ["Docker"]


class TestCustomTaxonomy:
    def test_empty_classifies_everything_as_other(self):
        taxonomy = SkillTaxonomy.empty()
        assert taxonomy.categorize("Python") == DEFAULT_CATEGORY
        assert taxonomy.importance_of("Python") == SkillImportance.USEFUL

    def test_first_match_wins(self):
        taxonomy = SkillTaxonomy.from_mapping({
            "categories": {"Web": ["React"], "Frontend": ["React Native"]},
        })
        assert taxonomy.categorize("React Native") == "Web"

    def test_from_mapping_keeps_missing_tables(self):
        taxonomy = SkillTaxonomy.from_mapping({"core": ["Rust"]})
        assert taxonomy.importance_of("Rust") == SkillImportance.CORE
        assert taxonomy.importance_of("Python") == SkillImportance.USEFUL
        assert taxonomy.categorize("Python") == "Programming"
        assert taxonomy.prerequisites_of("Kubernetes") == ["Docker"]

    def test_from_mapping_prerequisites(self):
        taxonomy = SkillTaxonomy.from_mapping({"prerequisites": {"Rust": ["C"]}})
        assert taxonomy.prerequisites_of("Rust") == ["C"]
        assert taxonomy.prerequisites_of("딥러닝") == []

    @pytest.mark.parametrize("data", [
        {"core": ["", "Python"]},
        {"important": ["  "]},
        {"categories": {"Web": ["React", ""]}},
        {"categories": {" ": ["React"]}},
        {"prerequisites": {"Rust": [""]}},
    ])
    def test_from_mapping_rejects_blank_entries(self, data):
        with pytest.raises(ValueError):
            SkillTaxonomy.from_mapping(data)
