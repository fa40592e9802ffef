"""
Core Package - Performance Review Score Engine
score_engine/core/__init__.py

Core infrastructure: exceptions, dependencies.
"""

from score_engine.core.exceptions import (
    AdjustmentAlreadyReviewedException,
    AdjustmentNotApprovedException,
    ConcurrentModificationException,
    DuplicateEntityException,
    EntityDeletedException,
    EntityNotFoundException,
    FinalScoreLockedException,
    FinalScoreNotLockedException,
    InvalidEngineerLevelException,
    InvalidPillarScoreException,
    InvalidWeightedScoreException,
    MissingRejectionReasonException,
    RepositoryException,
    ReviewPermissionException,
    ScoreEngineException,
    ScoreValidationException,
    WeightConfigurationException,
)

__all__ = [
    # Domain
    "AdjustmentAlreadyReviewedException",
    "AdjustmentNotApprovedException",
    "FinalScoreLockedException",
    "FinalScoreNotLockedException",
    "InvalidEngineerLevelException",
    "InvalidPillarScoreException",
    "InvalidWeightedScoreException",
    "MissingRejectionReasonException",
    "ReviewPermissionException",
    "ScoreEngineException",
    "ScoreValidationException",
    "WeightConfigurationException",
    # Repository
    "ConcurrentModificationException",
    "DuplicateEntityException",
    "EntityDeletedException",
    "EntityNotFoundException",
    "RepositoryException",
]
