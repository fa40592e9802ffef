"""
ScoreAdjustmentRequest Entity
score_engine/models/score_adjustment.py

PENDING --approve--> APPROVED
PENDING --reject---> REJECTED

Both outcomes are terminal; a request is reviewed exactly once.
"""

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, field_validator

from score_engine.core.exceptions import AdjustmentAlreadyReviewedException
from score_engine.models.enumerations import AdjustmentStatus
from score_engine.models.scores import PillarScores


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ScoreAdjustmentRequest(BaseModel):
    """Post-lock proposal to change a final score."""

    id: UUID = Field(default_factory=uuid4)
    cycle_id: str = Field(..., min_length=1)
    employee_id: str = Field(..., min_length=1)
    requester_id: str = Field(..., min_length=1)
    approver_id: Optional[str] = None

    reason: str = Field(..., description="Why the score should change")
    proposed_scores: PillarScores

    status: AdjustmentStatus = AdjustmentStatus.PENDING
    requested_at: datetime = Field(default_factory=_utcnow)
    reviewed_at: Optional[datetime] = None
    review_notes: Optional[str] = None
    rejection_reason: Optional[str] = None

    # Optimistic concurrency token, bumped by the repository on every save
    version: int = Field(default=0, ge=0)

    @field_validator("reason")
    @classmethod
    def validate_reason(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Adjustment reason cannot be blank")
        return v.strip()

    @property
    def is_pending(self) -> bool:
        return self.status == AdjustmentStatus.PENDING

    def approve(self, reviewer_id: str, notes: Optional[str] = None) -> None:
        self._review(AdjustmentStatus.APPROVED, reviewer_id)
        self.review_notes = notes

    def reject(self, reviewer_id: str, notes: Optional[str] = None) -> None:
        self._review(AdjustmentStatus.REJECTED, reviewer_id)
        self.review_notes = notes
        self.rejection_reason = notes

    def _review(self, outcome: AdjustmentStatus, reviewer_id: str) -> None:
        if self.status != AdjustmentStatus.PENDING:
            raise AdjustmentAlreadyReviewedException(str(self.id), self.status.value)
        self.status = outcome
        self.approver_id = reviewer_id
        self.reviewed_at = _utcnow()
