"""
Error Schemas - API Layer
Pydantic models for structured error responses
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class ErrorResponse(BaseModel):
    """Standard error response model"""
    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: Optional[str] = Field(None, description="Additional error details")
    timestamp: datetime = Field(default_factory=datetime.now, description="Error timestamp")
    request_id: Optional[str] = Field(None, description="Request tracking ID")


class ValidationErrorResponse(ErrorResponse):
    """Malformed roadmap document"""
    error_code: str = Field(default="DOMAIN_VALIDATION_ERROR")
    field: Optional[str] = Field(None, description="Offending field path")


class NotFoundErrorResponse(ErrorResponse):
    """Unknown roadmap or milestone"""
    error_code: str = Field(default="RESOURCE_NOT_FOUND")
    resource_type: Optional[str] = Field(None, description="Type of resource not found")
    resource_id: Optional[str] = Field(None, description="ID of resource not found")


class AlreadyCompletedErrorResponse(ErrorResponse):
    """Duplicate completion attempt"""
    error_code: str = Field(default="MILESTONE_ALREADY_COMPLETED")
    milestone_id: Optional[str] = Field(None, description="Milestone that was already completed")
    completed_at: Optional[datetime] = Field(None, description="Timestamp of the original completion")
