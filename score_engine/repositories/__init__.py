"""
Repositories Package - Performance Review Score Engine
score_engine/repositories/__init__.py

Async persistence ports and their in-memory adapters.
"""

from score_engine.repositories.base import InMemoryRepository
from score_engine.repositories.final_score_repository import (
    FinalScoreRepository,
    InMemoryFinalScoreRepository,
)
from score_engine.repositories.score_adjustment_repository import (
    InMemoryScoreAdjustmentRequestRepository,
    ScoreAdjustmentRequestRepository,
)

__all__ = [
    "InMemoryRepository",
    "FinalScoreRepository",
    "InMemoryFinalScoreRepository",
    "ScoreAdjustmentRequestRepository",
    "InMemoryScoreAdjustmentRequestRepository",
]
