"""
Dependency Injection - API Layer

Provides FastAPI dependency functions that create and cache infrastructure
and application layer objects. Uses Python's lru_cache for singletons.

Pattern: each get_*() function is a FastAPI dependency (callable that
FastAPI calls per-request or once at startup via lru_cache).

Everything is driven by ROADMAP_* environment variables with safe defaults
so the app starts with zero configuration for local development.
"""
from functools import lru_cache

from application.services.progress_aggregator import ProgressAggregatorService
from application.services.recommendation_engine import RecommendationEngineService
from application.services.skill_graph_builder import SkillGraphBuilderService
from application.use_cases.track_roadmap_progress_use_case import TrackRoadmapProgressUseCase
from infrastructure.config.engine_config import EngineConfig
from infrastructure.logging.structured_logger import get_logger
from infrastructure.persistence.in_memory_roadmap_store import InMemoryRoadmapStore

logger = get_logger(__name__)


@lru_cache(maxsize=1)
def get_engine_config() -> EngineConfig:
    """Singleton EngineConfig read from the environment."""
    config = EngineConfig.from_env()
    logger.info(
        "Engine configuration loaded",
        recommendation_limit=config.recommendation_limit,
        quick_win_limit=config.quick_win_limit,
        default_milestone_hours=config.default_milestone_hours,
        taxonomy_path=str(config.taxonomy_path) if config.taxonomy_path else None,
    )
    return config


@lru_cache(maxsize=1)
def get_roadmap_store() -> InMemoryRoadmapStore:
    """Singleton process-local roadmap store."""
    return InMemoryRoadmapStore()


@lru_cache(maxsize=1)
def get_use_case() -> TrackRoadmapProgressUseCase:
    """
    Singleton use case wired to the configured taxonomy.

    Must be a singleton: the per-roadmap completion locks live on it.
    """
    config = get_engine_config()
    return TrackRoadmapProgressUseCase(
        completion_store=get_roadmap_store(),
        graph_builder=SkillGraphBuilderService(config.load_taxonomy()),
        progress_aggregator=ProgressAggregatorService(),
        recommendation_engine=RecommendationEngineService(),
    )


def reset_dependencies() -> None:
    """Drop cached singletons (tests and config reloads)."""
    get_use_case.cache_clear()
    get_roadmap_store.cache_clear()
    get_engine_config.cache_clear()
