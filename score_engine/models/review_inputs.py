"""
Review inputs supplied by the data-entry collaborators.

ManagerEvaluation drives the final score calculation; PeerFeedback feeds
the anonymized peer aggregation.
"""

from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from score_engine.models.enumerations import EngineerLevel
from score_engine.models.scores import PillarScores


class ManagerEvaluation(BaseModel):
    """Submitted manager evaluation for one employee in one cycle."""

    id: UUID = Field(default_factory=uuid4)
    cycle_id: str = Field(..., min_length=1)
    employee_id: str = Field(..., min_length=1)
    manager_id: Optional[str] = None
    scores: PillarScores
    employee_level: Optional[EngineerLevel] = Field(
        default=None,
        description="Employee's current level"
    )
    proposed_level: Optional[EngineerLevel] = Field(
        default=None,
        description="Level proposed by the manager, takes precedence for weighting"
    )


class PeerFeedback(BaseModel):
    """One peer's scores and comments about a colleague."""

    id: UUID = Field(default_factory=uuid4)
    cycle_id: str = Field(..., min_length=1)
    reviewee_id: str = Field(..., min_length=1)
    reviewer_id: str = Field(..., min_length=1)
    scores: PillarScores
    strengths: Optional[str] = None
    growth_areas: Optional[str] = None
    general_comments: Optional[str] = None
