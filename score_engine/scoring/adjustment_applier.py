"""
Adjustment Applier
score_engine/scoring/adjustment_applier.py

Applies an APPROVED ScoreAdjustmentRequest to its FinalScore:

    1. recalculate the weighted score at the score's final_level
    2. unlock (if locked)
    3. update_scores(proposed, recalculated)
    4. re-lock (if it was locked before step 2)

Step 1 runs first so a configuration error leaves the score untouched.
The re-lock runs even if the update fails, so the score never ends up
unlocked by accident.
"""

import structlog
from dataclasses import dataclass
from typing import Optional

from score_engine.core.exceptions import AdjustmentNotApprovedException, ScoreValidationException
from score_engine.models.enumerations import AdjustmentStatus
from score_engine.models.final_score import FinalScore
from score_engine.models.score_adjustment import ScoreAdjustmentRequest
from score_engine.models.scores import PillarScores, WeightedScore
from score_engine.scoring.score_calculator import ScoreCalculator

logger = structlog.get_logger(__name__)


@dataclass
class AdjustmentResult:
    """Output of AdjustmentApplier.apply()."""
    final_score: FinalScore
    previous_scores: PillarScores
    previous_weighted_score: WeightedScore
    relocked: bool


class AdjustmentApplier:
    """Unlock → update → re-lock orchestration for approved adjustments."""

    def __init__(self, score_calculator: Optional[ScoreCalculator] = None):
        self.score_calculator = score_calculator or ScoreCalculator()

    def apply(self, final_score: FinalScore, request: ScoreAdjustmentRequest) -> AdjustmentResult:
        if request.status != AdjustmentStatus.APPROVED:
            raise AdjustmentNotApprovedException(str(request.id), request.status.value)
        if (request.cycle_id, request.employee_id) != (final_score.cycle_id, final_score.employee_id):
            raise ScoreValidationException(
                f"Adjustment request {request.id} does not target final score {final_score.id}"
            )

        previous_scores = final_score.pillar_scores
        previous_weighted = final_score.weighted_score
        new_weighted = self.score_calculator.calculate_weighted_score(
            request.proposed_scores, final_score.final_level
        )

        was_locked = final_score.locked
        final_score.unlock()
        try:
            final_score.update_scores(request.proposed_scores, new_weighted)
        finally:
            if was_locked:
                final_score.lock()

        logger.info(
            "score_adjustment_applied",
            request_id=str(request.id),
            final_score_id=str(final_score.id),
            previous_weighted_score=float(previous_weighted.value),
            weighted_score=float(new_weighted.value),
            bonus_tier=new_weighted.bonus_tier.value,
            relocked=was_locked,
        )
        return AdjustmentResult(
            final_score=final_score,
            previous_scores=previous_scores,
            previous_weighted_score=previous_weighted,
            relocked=was_locked,
        )
