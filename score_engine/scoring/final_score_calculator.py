"""
Final Score Calculator
score_engine/scoring/final_score_calculator.py

Manager evaluation (+ optional peer aggregation) → fresh FinalScore.

Level used for weighting, first available of:
    1. proposed level on the evaluation
    2. employee's current level on the evaluation
    3. DEFAULT_ENGINEER_LEVEL setting (MID)

Does not persist; the caller upserts the result keyed by (cycle, employee).
"""

import structlog
from typing import Optional

from score_engine.config import get_settings
from score_engine.models.enumerations import EngineerLevel
from score_engine.models.final_score import FinalScore
from score_engine.models.review_inputs import ManagerEvaluation
from score_engine.scoring.peer_aggregation import PeerFeedbackAggregation
from score_engine.scoring.score_calculator import ScoreCalculator

logger = structlog.get_logger(__name__)


class FinalScoreCalculator:
    """Orchestrates weighted scoring and peer aggregation into a FinalScore."""

    def __init__(
        self,
        score_calculator: Optional[ScoreCalculator] = None,
        default_level: Optional[EngineerLevel] = None,
    ):
        self.score_calculator = score_calculator or ScoreCalculator()
        self.default_level = default_level or EngineerLevel(get_settings().DEFAULT_ENGINEER_LEVEL)

    def resolve_level(self, evaluation: ManagerEvaluation) -> EngineerLevel:
        return evaluation.proposed_level or evaluation.employee_level or self.default_level

    def calculate_final_score(
        self,
        evaluation: ManagerEvaluation,
        peer_aggregation: Optional[PeerFeedbackAggregation] = None,
    ) -> FinalScore:
        final_level = self.resolve_level(evaluation)
        weighted = self.score_calculator.calculate_weighted_score(evaluation.scores, final_level)

        has_peers = peer_aggregation is not None and peer_aggregation.has_feedback
        final_score = FinalScore.create(
            cycle_id=evaluation.cycle_id,
            employee_id=evaluation.employee_id,
            pillar_scores=evaluation.scores,
            weighted_score=weighted,
            final_level=final_level,
            peer_average_scores=peer_aggregation.average_scores if has_peers else None,
            peer_feedback_count=peer_aggregation.feedback_count if has_peers else 0,
        )

        logger.info(
            "final_score_calculated",
            cycle_id=final_score.cycle_id,
            employee_id=final_score.employee_id,
            final_level=final_level.value,
            weighted_score=float(weighted.value),
            percentage=float(weighted.percentage),
            bonus_tier=weighted.bonus_tier.value,
            peer_feedback_count=final_score.peer_feedback_count,
        )
        return final_score
