"""
Dependencies - Performance Review Score Engine
score_engine/core/dependencies.py

Process-wide wiring of repositories, collaborators and services. The
in-memory adapters are the defaults; a deployment swaps them by calling
the service constructors with its own adapters.
"""

from functools import lru_cache

from score_engine.config import get_settings
from score_engine.repositories.final_score_repository import InMemoryFinalScoreRepository
from score_engine.repositories.score_adjustment_repository import (
    InMemoryScoreAdjustmentRequestRepository,
)
from score_engine.services.employee_directory import InMemoryEmployeeDirectory
from score_engine.services.final_score_service import FinalScoreService
from score_engine.services.review_inputs import InMemoryReviewInputSource
from score_engine.services.score_adjustment_service import ScoreAdjustmentService


@lru_cache()
def get_final_score_repository() -> InMemoryFinalScoreRepository:
    """Get cached FinalScoreRepository instance."""
    return InMemoryFinalScoreRepository()


@lru_cache()
def get_score_adjustment_repository() -> InMemoryScoreAdjustmentRequestRepository:
    """Get cached ScoreAdjustmentRequestRepository instance."""
    return InMemoryScoreAdjustmentRequestRepository()


@lru_cache()
def get_employee_directory() -> InMemoryEmployeeDirectory:
    return InMemoryEmployeeDirectory()


@lru_cache()
def get_review_input_source() -> InMemoryReviewInputSource:
    return InMemoryReviewInputSource()


@lru_cache()
def get_final_score_service() -> FinalScoreService:
    """Get cached FinalScoreService wired to the cached adapters."""
    return FinalScoreService(
        final_score_repository=get_final_score_repository(),
        review_inputs=get_review_input_source(),
        employee_directory=get_employee_directory(),
        settings=get_settings(),
    )


@lru_cache()
def get_score_adjustment_service() -> ScoreAdjustmentService:
    """Get cached ScoreAdjustmentService sharing the final score repository."""
    return ScoreAdjustmentService(
        request_repository=get_score_adjustment_repository(),
        final_score_repository=get_final_score_repository(),
        employee_directory=get_employee_directory(),
        settings=get_settings(),
    )


def reset_dependencies() -> None:
    """Drop cached instances. Useful for tests."""
    for getter in (
        get_final_score_repository,
        get_score_adjustment_repository,
        get_employee_directory,
        get_review_input_source,
        get_final_score_service,
        get_score_adjustment_service,
    ):
        getter.cache_clear()
