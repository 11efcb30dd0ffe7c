"""Unit tests for EngineConfig."""
import json
import logging

import pytest

from domain.entities.skill_node import SkillImportance
from infrastructure.config.engine_config import DEFAULT_MILESTONE_HOURS, EngineConfig


class TestEngineConfig:
    def test_defaults(self):
        config = EngineConfig.default()
        assert config.recommendation_limit == 5
        assert config.quick_win_limit == 3
        assert config.default_milestone_hours == DEFAULT_MILESTONE_HOURS == 20
        assert config.taxonomy_path is None
        assert config.log_level_value == logging.INFO

    def test_for_testing_is_verbose(self):
        assert EngineConfig.for_testing().log_level == "DEBUG"

    @pytest.mark.parametrize("kwargs", [
        {"recommendation_limit": 0},
        {"recommendation_limit": 51},
        {"quick_win_limit": 0},
        {"default_milestone_hours": -1},
        {"log_level": "LOUD"},
    ])
    def test_bounds(self, kwargs):
        with pytest.raises(ValueError):
            EngineConfig(**kwargs)

    def test_log_level_normalised(self):
        assert EngineConfig(log_level="warning").log_level == "WARNING"

    def test_from_env(self, tmp_path):
        config = EngineConfig.from_env({
            "ROADMAP_RECOMMENDATION_LIMIT": "8",
            "ROADMAP_QUICK_WIN_LIMIT": "4",
            "ROADMAP_DEFAULT_MILESTONE_HOURS": "12",
            "ROADMAP_SKILL_TAXONOMY_PATH": str(tmp_path / "taxonomy.json"),
            "ROADMAP_LOG_LEVEL": "debug",
        })
        assert config.recommendation_limit == 8
        assert config.quick_win_limit == 4
        assert config.default_milestone_hours == 12
        assert config.taxonomy_path == tmp_path / "taxonomy.json"
        assert config.log_level == "DEBUG"

    def test_from_env_empty_uses_defaults(self):
        assert EngineConfig.from_env({}) == EngineConfig()


class TestTaxonomyLoading:
    def test_builtin_taxonomy_without_path(self):
        taxonomy = EngineConfig().load_taxonomy()
        assert taxonomy.categorize("Python") == "Programming"

    def test_taxonomy_from_file(self, tmp_path):
        path = tmp_path / "taxonomy.json"
        path.write_text(
            json.dumps({"core": ["Rust"], "prerequisites": {"Tokio": ["Rust"]}}, ensure_ascii=False),
            encoding="utf-8",
        )
        taxonomy = EngineConfig(taxonomy_path=path).load_taxonomy()
        assert taxonomy.importance_of("Rust") == SkillImportance.CORE
        assert taxonomy.prerequisites_of("Tokio") == ["Rust"]

    def test_taxonomy_file_must_be_object(self, tmp_path):
        path = tmp_path / "taxonomy.json"
        path.write_text("[1, 2, 3]", encoding="utf-8")
        with pytest.raises(ValueError):
            EngineConfig(taxonomy_path=path).load_taxonomy()

    def test_taxonomy_file_with_blank_entry_rejected(self, tmp_path):
        path = tmp_path / "taxonomy.json"
        path.write_text(json.dumps({"core": ["", "Python"]}), encoding="utf-8")
        with pytest.raises(ValueError):
            EngineConfig(taxonomy_path=path).load_taxonomy()
