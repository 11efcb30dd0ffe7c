"""
Logging Middleware - API Layer

Emits one structured JSON access record per request with method, path,
status_code, duration_ms, request_id and, for roadmap routes, roadmap_id.

A request_id (UUID, or the caller's X-Request-ID when supplied) is stored on
request.state for the error handlers and echoed in the response headers.
"""
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from infrastructure.logging.structured_logger import get_logger

logger = get_logger("api.access")

# Probe and docs paths stay out of the access log
_SKIP_PATHS = {"/api/v1/health", "/docs", "/redoc", "/openapi.json"}

_ROADMAP_PREFIX = "/api/v1/roadmaps/"


class LoggingMiddleware(BaseHTTPMiddleware):
    """Logs every request and tags the response with X-Request-ID / X-Response-Time."""

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id
        start_time = time.monotonic()

        response: Response = await call_next(request)

        duration_ms = round((time.monotonic() - start_time) * 1000, 2)
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time"] = f"{duration_ms}ms"

        path = request.url.path
        if path not in _SKIP_PATHS:
            logger.info(
                "HTTP request",
                method=request.method,
                path=path,
                status_code=response.status_code,
                duration_ms=duration_ms,
                request_id=request_id,
                roadmap_id=_roadmap_id(path),
            )

        return response


def _roadmap_id(path: str):
    """Path segment after /roadmaps/, or None outside roadmap routes."""
    if not path.startswith(_ROADMAP_PREFIX):
        return None
    return path[len(_ROADMAP_PREFIX):].split("/", 1)[0] or None
