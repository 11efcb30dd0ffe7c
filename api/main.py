"""
FastAPI Application - API Layer
Reference HTTP adapter for the roadmap progress engine
"""
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .routers import health_router, roadmap_router
from .middleware.error_handler import add_error_handlers
from .middleware.logging_middleware import LoggingMiddleware
from .dependencies.dependency_injection import get_engine_config

config = get_engine_config()

logging.basicConfig(
    level=config.log_level_value,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.info("Starting Roadmap Progress Engine API (log level %s)", config.log_level)
    yield
    logging.info("Shutting down Roadmap Progress Engine API")


app = FastAPI(
    title="Roadmap Progress Engine API",
    description="Skill availability, progress and recommendations for generated learning roadmaps",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(LoggingMiddleware)

add_error_handlers(app)

app.include_router(health_router.router, prefix="/api/v1", tags=["Health"])
app.include_router(roadmap_router.router, prefix="/api/v1", tags=["Roadmaps"])
