"""
Weighted Score Calculator
score_engine/scoring/score_calculator.py

Formula:
    weighted = Σ (pillar_score × level_weight[pillar])   over the 5 pillars

Pillar scores are in [0, 4] and weights sum to 1.0, so the result is in
[0, 4]. No rounding or clamping is applied: an out-of-range result means
a calculation bug and is rejected by WeightedScore.
"""

import structlog
from decimal import Decimal
from typing import Mapping, Optional

from score_engine.models.enumerations import EngineerLevel, Pillar
from score_engine.models.scores import PillarScores, WeightedScore
from score_engine.scoring.utils import weighted_sum
from score_engine.scoring.weights import PillarWeights, get_weights

logger = structlog.get_logger(__name__)


class ScoreCalculator:
    """Calculate level-weighted scores."""

    def __init__(self, weights: Optional[Mapping[EngineerLevel, PillarWeights]] = None):
        # None means the module-level LEVEL_WEIGHTS table
        self._weights = weights

    def calculate_weighted_score(self, pillar_scores: PillarScores, level: EngineerLevel) -> WeightedScore:
        """
        Args:
            pillar_scores: The five pillar scores (0-4 each).
            level: Level whose weight vector is applied.

        Returns:
            WeightedScore in [0, 4].

        Raises:
            WeightConfigurationException: no weights registered for `level`.

        Examples:
            >>> calc = ScoreCalculator()
            >>> calc.calculate_weighted_score(PillarScores(3, 2, 4, 3, 2), EngineerLevel.SENIOR).value
            Decimal('2.85')
        """
        weights = get_weights(level, self._weights)

        pillars = list(Pillar)
        value = weighted_sum(
            [Decimal(pillar_scores.get(p)) for p in pillars],
            [weights.get(p) for p in pillars],
        )

        logger.debug(
            "weighted_score_calculated",
            level=getattr(level, "value", level),
            weighted_score=float(value),
        )
        return WeightedScore.from_value(value)
