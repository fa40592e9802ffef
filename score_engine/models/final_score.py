"""
FinalScore Entity
score_engine/models/final_score.py

One final score per (cycle, employee). Two independent axes of state:

  lock axis:      lock() / unlock()            idempotent
  delivery axis:  mark_feedback_delivered()    repeatable, last write wins

update_scores() is the only invariant the entity enforces itself: it
fails while the score is locked. Deadlines and authorization belong to
the calling services.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from score_engine.core.exceptions import FinalScoreLockedException
from score_engine.models.enumerations import BonusTier, EngineerLevel
from score_engine.models.scores import PillarScores, WeightedScore


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class FinalScore(BaseModel):
    """Stateful final score aggregate."""

    id: UUID = Field(default_factory=uuid4, description="Unique final score identifier")
    cycle_id: str = Field(..., min_length=1, description="Review cycle the score belongs to")
    employee_id: str = Field(..., min_length=1, description="Employee being scored")

    pillar_scores: PillarScores
    weighted_score: WeightedScore
    final_level: EngineerLevel = Field(
        ...,
        description="Level used for weighting, independent of the employee's current level"
    )

    peer_average_scores: Optional[PillarScores] = None
    peer_feedback_count: int = Field(default=0, ge=0)

    locked: bool = False
    locked_at: Optional[datetime] = None

    feedback_delivered: bool = False
    feedback_delivered_at: Optional[datetime] = None
    delivered_at: Optional[datetime] = None
    delivered_by: Optional[str] = None
    feedback_notes: Optional[str] = None

    calculated_at: datetime = Field(default_factory=_utcnow)

    # Optimistic concurrency token, bumped by the repository on every save
    version: int = Field(default=0, ge=0)

    @classmethod
    def create(
        cls,
        cycle_id: str,
        employee_id: str,
        pillar_scores: PillarScores,
        weighted_score: WeightedScore,
        final_level: EngineerLevel,
        peer_average_scores: Optional[PillarScores] = None,
        peer_feedback_count: int = 0,
        calculated_at: Optional[datetime] = None,
    ) -> "FinalScore":
        """Create a fresh, unlocked and undelivered final score."""
        return cls(
            cycle_id=cycle_id,
            employee_id=employee_id,
            pillar_scores=pillar_scores,
            weighted_score=weighted_score,
            final_level=final_level,
            peer_average_scores=peer_average_scores,
            peer_feedback_count=peer_feedback_count,
            calculated_at=calculated_at or _utcnow(),
        )

    # ------------------------------------------------------------------
    # Lock axis
    # ------------------------------------------------------------------

    def lock(self) -> None:
        if self.locked:
            return
        self.locked = True
        self.locked_at = _utcnow()

    def unlock(self) -> None:
        if not self.locked:
            return
        self.locked = False
        self.locked_at = None

    # ------------------------------------------------------------------
    # Score mutation
    # ------------------------------------------------------------------

    def update_scores(self, pillar_scores: PillarScores, weighted_score: WeightedScore) -> None:
        """
        Replace pillar and weighted scores.

        Raises:
            FinalScoreLockedException: the score is locked; nothing changes
        """
        if self.locked:
            raise FinalScoreLockedException(str(self.id))
        self.pillar_scores = pillar_scores
        self.weighted_score = weighted_score

    # ------------------------------------------------------------------
    # Delivery axis (not gated by the lock)
    # ------------------------------------------------------------------

    def mark_feedback_delivered(self, delivered_by: str, feedback_notes: Optional[str] = None) -> None:
        """Record delivery. Omitted notes keep previously recorded notes."""
        now = _utcnow()
        self.feedback_delivered = True
        self.feedback_delivered_at = now
        self.delivered_at = now
        self.delivered_by = delivered_by
        if feedback_notes:
            self.feedback_notes = feedback_notes

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @property
    def is_locked(self) -> bool:
        return self.locked

    @property
    def percentage_score(self) -> Decimal:
        return self.weighted_score.percentage

    @property
    def bonus_tier(self) -> BonusTier:
        return self.weighted_score.bonus_tier

    @property
    def final_scores(self) -> PillarScores:
        return self.pillar_scores
