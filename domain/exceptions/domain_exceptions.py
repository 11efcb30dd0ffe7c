"""
Domain Exceptions - Clean Architecture Domain Layer

Defines all exceptions that can be raised by the roadmap engine.
These exceptions encode structural validation failures and illegal state
transitions. The domain layer raises ONLY these exceptions, never
HTTPException or stdlib exceptions.
"""
from typing import Optional


class DomainError(Exception):
    """Base class for all domain exceptions.

    Lets the API layer catch every engine error in one handler and map it
    to an HTTP status code without importing individual exception types.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ValidationError(DomainError):
    """Raised when a roadmap document or entity field fails validation.

    Fatal at load time: a roadmap that fails validation never enters the
    engine.

    Example:
        raise ValidationError("phases", "Phase orders must be contiguous 0..N-1")

    Maps to HTTP 422 Unprocessable Entity.
    """

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        self.reason = message
        super().__init__(f"Validation failed for '{field}': {message}")


class BusinessRuleViolation(DomainError):
    """Raised when an aggregate state transition is not allowed.

    Maps to HTTP 409 Conflict.
    """

    def __init__(self, message: str, rule: Optional[str] = None) -> None:
        self.rule = rule
        super().__init__(message)


class AlreadyCompletedError(BusinessRuleViolation):
    """Raised when a milestone that is already completed is completed again.

    Completion is single-fire. The existing completion state is left
    untouched, so the caller can surface this as a user-facing message.

    Example:
        raise AlreadyCompletedError("milestone-python-0", milestone.completed_at)
    """

    def __init__(self, milestone_id: str, completed_at=None) -> None:
        self.milestone_id = milestone_id
        self.completed_at = completed_at
        super().__init__(
            f"Milestone '{milestone_id}' is already completed",
            rule="single_completion",
        )


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist.

    Example:
        raise NotFoundError("Milestone", milestone_id)

    Maps to HTTP 404 Not Found.
    """

    def __init__(self, entity_type: str, identifier: str) -> None:
        self.entity_type = entity_type
        self.identifier = identifier
        super().__init__(f"{entity_type} with identifier '{identifier}' not found")
