"""
Peer Feedback Aggregation
score_engine/scoring/peer_aggregation.py

Averages peer scores per pillar and strips reviewer identity from
comments.

  average_values  fractional per-pillar means, for display
  average_scores  the same means rounded half-up to integer pillars, as
                  stored on FinalScore

Comments are grouped by category and sorted, so their order carries no
trace of submission order and none is paired with a reviewer.
"""

import structlog
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, List, Sequence, Tuple

from score_engine.models.enumerations import CommentCategory, Pillar
from score_engine.models.review_inputs import PeerFeedback
from score_engine.models.scores import PillarScores
from score_engine.scoring.utils import mean, round_half_up

logger = structlog.get_logger(__name__)


@dataclass
class AnonymizedComments:
    """Peer comments with reviewer identity removed."""
    strengths: List[str] = field(default_factory=list)
    growth_areas: List[str] = field(default_factory=list)
    general: List[str] = field(default_factory=list)

    def flattened(self) -> List[Tuple[CommentCategory, str]]:
        return (
            [(CommentCategory.STRENGTHS, c) for c in self.strengths]
            + [(CommentCategory.GROWTH_AREAS, c) for c in self.growth_areas]
            + [(CommentCategory.GENERAL, c) for c in self.general]
        )

    def __len__(self) -> int:
        return len(self.strengths) + len(self.growth_areas) + len(self.general)


@dataclass
class PeerFeedbackAggregation:
    """Output of PeerFeedbackAggregator.aggregate()."""
    average_scores: PillarScores                # rounded, integral pillars
    average_values: Dict[Pillar, Decimal]       # fractional means, 0.0001
    feedback_count: int
    anonymized_comments: AnonymizedComments

    @property
    def has_feedback(self) -> bool:
        return self.feedback_count > 0

    @property
    def comments(self) -> List[Tuple[CommentCategory, str]]:
        return self.anonymized_comments.flattened()


def _clean(comment) -> str:
    return comment.strip() if isinstance(comment, str) else ""


class PeerFeedbackAggregator:
    """Aggregate and anonymize peer feedback for one reviewee."""

    def aggregate(self, feedbacks: Sequence[PeerFeedback]) -> PeerFeedbackAggregation:
        """
        No feedback is a valid state: an empty input yields all-zero
        averages and a count of 0.
        """
        feedbacks = list(feedbacks or [])
        count = len(feedbacks)

        per_pillar = {p: [Decimal(fb.scores.get(p)) for fb in feedbacks] for p in Pillar}
        average_values: Dict[Pillar, Decimal] = {p: mean(v) for p, v in per_pillar.items()}
        # rounded from the exact mean, not from the 4-place display value
        average_scores = PillarScores.create(
            {p: round_half_up(mean(v, places=None)) for p, v in per_pillar.items()}
        )

        strengths = sorted(c for c in (_clean(fb.strengths) for fb in feedbacks) if c)
        growth_areas = sorted(c for c in (_clean(fb.growth_areas) for fb in feedbacks) if c)
        general = sorted(c for c in (_clean(fb.general_comments) for fb in feedbacks) if c)

        logger.info(
            "peer_feedback_aggregated",
            feedback_count=count,
            comment_count=len(strengths) + len(growth_areas) + len(general),
        )

        return PeerFeedbackAggregation(
            average_scores=average_scores,
            average_values=average_values,
            feedback_count=count,
            anonymized_comments=AnonymizedComments(
                strengths=strengths,
                growth_areas=growth_areas,
                general=general,
            ),
        )
