"""
Models Package - Performance Review Score Engine
score_engine/models/__init__.py

Enumerations, value objects, entities and review inputs.
"""

from score_engine.models.employee import EmployeeRecord
from score_engine.models.enumerations import (
    AdjustmentStatus,
    BonusTier,
    CommentCategory,
    EngineerLevel,
    Pillar,
)
from score_engine.models.final_score import FinalScore
from score_engine.models.review_inputs import ManagerEvaluation, PeerFeedback
from score_engine.models.score_adjustment import ScoreAdjustmentRequest
from score_engine.models.scores import PillarScores, WeightedScore

__all__ = [
    # Enumerations
    "AdjustmentStatus",
    "BonusTier",
    "CommentCategory",
    "EngineerLevel",
    "Pillar",
    # Value objects
    "PillarScores",
    "WeightedScore",
    # Entities
    "FinalScore",
    "ScoreAdjustmentRequest",
    # Inputs
    "EmployeeRecord",
    "ManagerEvaluation",
    "PeerFeedback",
]
