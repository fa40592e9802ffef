"""
Services module for the Performance Review Score Engine.
"""

from score_engine.services.employee_directory import EmployeeDirectory, InMemoryEmployeeDirectory
from score_engine.services.final_score_service import (
    CalculationOutcome,
    CycleCalculationReport,
    FinalScoreService,
    LockReport,
    TeamScoreRow,
)
from score_engine.services.review_inputs import InMemoryReviewInputSource, ReviewInputSource
from score_engine.services.score_adjustment_service import ReviewOutcome, ScoreAdjustmentService

__all__ = [
    "CalculationOutcome",
    "CycleCalculationReport",
    "EmployeeDirectory",
    "FinalScoreService",
    "InMemoryEmployeeDirectory",
    "InMemoryReviewInputSource",
    "LockReport",
    "ReviewInputSource",
    "ReviewOutcome",
    "ScoreAdjustmentService",
    "TeamScoreRow",
]
