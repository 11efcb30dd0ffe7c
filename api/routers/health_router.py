"""Health Router - GET /api/v1/health"""
from fastapi import APIRouter, Depends

from api.dependencies.dependency_injection import get_roadmap_store
from infrastructure.persistence.in_memory_roadmap_store import InMemoryRoadmapStore

router = APIRouter()


@router.get("/health", summary="API health check")
async def health(store: InMemoryRoadmapStore = Depends(get_roadmap_store)):
    """Returns API version, status and the number of loaded roadmaps."""
    return {
        "status": "healthy",
        "version": "1.0.0",
        "service": "roadmap-progress-engine",
        "loaded_roadmaps": len(store.list_ids()),
    }
