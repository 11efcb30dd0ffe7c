"""
Error Handler - API Layer

Maps engine exceptions and request validation errors to structured JSON
responses so routers never need try/except for domain failures.

HTTP status mapping (first matching class wins):
  ValidationError          → 422  DOMAIN_VALIDATION_ERROR
  NotFoundError            → 404  RESOURCE_NOT_FOUND
  AlreadyCompletedError    → 409  MILESTONE_ALREADY_COMPLETED
  BusinessRuleViolation    → 409  BUSINESS_RULE_VIOLATION
  DomainError              → 422  DOMAIN_ERROR
  RequestValidationError   → 422  VALIDATION_ERROR
  Unhandled Exception      → 500  INTERNAL_SERVER_ERROR
"""
import logging
import traceback
import uuid
from datetime import datetime
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from domain.exceptions.domain_exceptions import (
    AlreadyCompletedError,
    BusinessRuleViolation,
    DomainError,
    NotFoundError,
    ValidationError,
)
from infrastructure.logging.structured_logger import get_logger

logger = logging.getLogger(__name__)
audit_logger = get_logger("api.roadmaps")

# Ordered specific → general
_DOMAIN_ERROR_TABLE = (
    (ValidationError, status.HTTP_422_UNPROCESSABLE_ENTITY, "DOMAIN_VALIDATION_ERROR"),
    (NotFoundError, status.HTTP_404_NOT_FOUND, "RESOURCE_NOT_FOUND"),
    (AlreadyCompletedError, status.HTTP_409_CONFLICT, "MILESTONE_ALREADY_COMPLETED"),
    (BusinessRuleViolation, status.HTTP_409_CONFLICT, "BUSINESS_RULE_VIOLATION"),
    (DomainError, status.HTTP_422_UNPROCESSABLE_ENTITY, "DOMAIN_ERROR"),
)


def _error_body(
    error_code: str,
    message: str,
    details: Optional[str] = None,
    request_id: Optional[str] = None,
    **extra,
) -> dict:
    payload = {
        "error_code": error_code,
        "message": message,
        "timestamp": datetime.now().isoformat(),
        "request_id": request_id,
    }
    if details:
        payload["details"] = details
    payload.update(extra)
    return payload


def _request_id(request: Request) -> Optional[str]:
    return getattr(request.state, "request_id", None)


def _classify(exc: DomainError):
    """(status_code, error_code) of the first table row matching exc."""
    return next(
        (status_code, error_code)
        for error_type, status_code, error_code in _DOMAIN_ERROR_TABLE
        if isinstance(exc, error_type)
    )


def _error_fields(exc: DomainError) -> Dict[str, Any]:
    """Extra body fields carried by each exception type."""
    if isinstance(exc, ValidationError):
        return {"details": f"Field: {exc.field}", "field": exc.field}
    if isinstance(exc, NotFoundError):
        return {"resource_type": exc.entity_type, "resource_id": exc.identifier}
    if isinstance(exc, AlreadyCompletedError):
        return {
            "milestone_id": exc.milestone_id,
            "completed_at": exc.completed_at.isoformat() if exc.completed_at else None,
        }
    if isinstance(exc, BusinessRuleViolation):
        return {"rule": exc.rule}
    return {}


def add_error_handlers(app: FastAPI) -> None:
    """Register domain, request-validation and catch-all handlers on the app."""

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = [
            {
                "field": ".".join(str(loc) for loc in err["loc"]),
                "message": err["msg"],
                "type": err["type"],
            }
            for err in exc.errors()
        ]
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=_error_body(
                error_code="VALIDATION_ERROR",
                message="Request validation failed",
                details=f"{len(errors)} field(s) failed validation",
                request_id=_request_id(request),
                validation_errors=errors,
            ),
        )

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError):
        status_code, error_code = _classify(exc)
        if isinstance(exc, AlreadyCompletedError):
            audit_logger.log_completion_rejected(
                request.path_params.get("roadmap_id", ""),
                exc.milestone_id,
                reason=exc.rule or "single_completion",
            )
        return JSONResponse(
            status_code=status_code,
            content=_error_body(
                error_code=error_code,
                message=exc.message,
                request_id=_request_id(request),
                **_error_fields(exc),
            ),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        correlation_id = str(uuid.uuid4())
        logger.error(
            "Unhandled exception [%s]: %s\n%s",
            correlation_id, exc, traceback.format_exc(),
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_error_body(
                error_code="INTERNAL_SERVER_ERROR",
                message="An unexpected error occurred. Please try again or contact support.",
                correlation_id=correlation_id,
            ),
        )
