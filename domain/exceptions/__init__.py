"""Domain Exceptions - Clean Architecture Domain Layer"""
from .domain_exceptions import (
    DomainError,
    ValidationError,
    BusinessRuleViolation,
    AlreadyCompletedError,
    NotFoundError,
)

__all__ = [
    "DomainError",
    "ValidationError",
    "BusinessRuleViolation",
    "AlreadyCompletedError",
    "NotFoundError",
]
