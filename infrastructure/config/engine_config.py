"""
Engine Configuration - Infrastructure Layer

Centralises the tunable policy of the roadmap engine: recommendation list
sizes, the default milestone effort used when a generated document omits
it, the skill taxonomy source and the log level.

Separating policy from the services allows configuration to be swapped in
tests without touching the engine code.
"""
import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from domain.value_objects.skill_taxonomy import SkillTaxonomy

# Effort attributed to a milestone whose document has no estimatedHours
DEFAULT_MILESTONE_HOURS = 20

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR"}


@dataclass
class EngineConfig:
    """
    Policy object for the roadmap engine.

    Attributes:
        recommendation_limit:    Max skills in next-learnable / locked lists.
        quick_win_limit:         Max milestones in urgent / quick-win lists.
        default_milestone_hours: Hours assumed for milestones without estimatedHours.
        taxonomy_path:           Optional JSON file replacing the default taxonomy tables.
        log_level:               Root log level name.
    """

    recommendation_limit: int = 5
    quick_win_limit: int = 3
    default_milestone_hours: int = DEFAULT_MILESTONE_HOURS
    taxonomy_path: Optional[Path] = None
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        """Validate configuration bounds."""
        if not 1 <= self.recommendation_limit <= 50:
            raise ValueError(f"recommendation_limit must be between 1 and 50, got {self.recommendation_limit}")
        if not 1 <= self.quick_win_limit <= 20:
            raise ValueError(f"quick_win_limit must be between 1 and 20, got {self.quick_win_limit}")
        if self.default_milestone_hours < 0:
            raise ValueError("default_milestone_hours cannot be negative")
        self.log_level = self.log_level.upper()
        if self.log_level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(_LOG_LEVELS)}, got {self.log_level}")

    @property
    def log_level_value(self) -> int:
        return getattr(logging, self.log_level)

    def load_taxonomy(self) -> SkillTaxonomy:
        """
        Return the configured taxonomy.

        Without taxonomy_path the built-in tables are used. The JSON file may
        contain any of: categories, core, important, prerequisites.
        """
        if self.taxonomy_path is None:
            return SkillTaxonomy.default()

        with open(self.taxonomy_path, encoding="utf-8") as fh:
            data = json.load(fh)
        if not isinstance(data, dict):
            raise ValueError(f"Taxonomy file {self.taxonomy_path} must contain a JSON object")
        return SkillTaxonomy.from_mapping(data)

    # ------------------------------------------------------------------
    # Factory helpers
    # ------------------------------------------------------------------

    @classmethod
    def default(cls) -> "EngineConfig":
        return cls()

    @classmethod
    def for_testing(cls) -> "EngineConfig":
        """Config with built-in taxonomy and verbose logging."""
        return cls(log_level="DEBUG")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EngineConfig":
        """
        Build a config from ROADMAP_* environment variables, falling back to
        defaults for anything unset.
        """
        env = os.environ if environ is None else environ
        taxonomy = env.get("ROADMAP_SKILL_TAXONOMY_PATH")
        return cls(
            recommendation_limit=int(env.get("ROADMAP_RECOMMENDATION_LIMIT", "5")),
            quick_win_limit=int(env.get("ROADMAP_QUICK_WIN_LIMIT", "3")),
            default_milestone_hours=int(env.get("ROADMAP_DEFAULT_MILESTONE_HOURS", str(DEFAULT_MILESTONE_HOURS))),
            taxonomy_path=Path(taxonomy) if taxonomy else None,
            log_level=env.get("ROADMAP_LOG_LEVEL", "INFO"),
        )
