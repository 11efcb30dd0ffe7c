"""
Completion Record Value Object - Clean Architecture Domain Layer

Returned by a successful milestone completion and handed to the external
persistence and reward collaborators.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class CompletionRecord:
    """Immutable result of the Pending -> Completed transition"""

    roadmap_id: str
    milestone_id: str
    completed_at: datetime
    notes: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "milestoneId": self.milestone_id,
            "completedAt": self.completed_at.isoformat(),
        }
