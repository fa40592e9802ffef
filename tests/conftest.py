# tests/conftest.py

"""
Pytest Fixtures - Shared test data for the score engine

EMPLOYEE REFERENCE:
- mgr-1:  engineering manager, manages emp-1 and emp-2
- mgr-2:  engineering manager, manages emp-3
- emp-1:  SENIOR, has peer feedback in cycle-2025
- emp-2:  MID, no peer feedback
- emp-3:  JUNIOR
- admin-1: calibration reviewer
"""

from itertools import count

import pytest
from datetime import datetime, timedelta, timezone

from score_engine.config import Settings
from score_engine.models import (
    EmployeeRecord,
    EngineerLevel,
    ManagerEvaluation,
    PeerFeedback,
    PillarScores,
)
from score_engine.models import final_score as final_score_module
from score_engine.models import score_adjustment as score_adjustment_module
from score_engine.repositories import (
    InMemoryFinalScoreRepository,
    InMemoryScoreAdjustmentRequestRepository,
)
from score_engine.services import (
    FinalScoreService,
    InMemoryEmployeeDirectory,
    InMemoryReviewInputSource,
    ScoreAdjustmentService,
)

CYCLE_ID = "cycle-2025"


# =============================================================================
# CLOCK
# =============================================================================

@pytest.fixture
def tick_clock(monkeypatch):
    """Replace entity clocks with one advancing a second per call."""
    start = datetime(2025, 12, 1, 9, 0, tzinfo=timezone.utc)
    ticks = count()

    def _now():
        return start + timedelta(seconds=next(ticks))

    monkeypatch.setattr(final_score_module, "_utcnow", _now)
    monkeypatch.setattr(score_adjustment_module, "_utcnow", _now)
    return start


# =============================================================================
# SCORES
# =============================================================================

@pytest.fixture
def sample_scores():
    """Scores whose SENIOR weighting is 2.85."""
    return PillarScores(
        project_impact=3,
        direction=2,
        engineering_excellence=4,
        operational_ownership=3,
        people_impact=2,
    )


@pytest.fixture
def improved_scores():
    """Scores whose SENIOR weighting is 3.50 (EXCEEDS)."""
    return PillarScores(
        project_impact=4,
        direction=3,
        engineering_excellence=4,
        operational_ownership=3,
        people_impact=3,
    )


# =============================================================================
# SETTINGS / COLLABORATORS
# =============================================================================

@pytest.fixture
def settings():
    return Settings(BATCH_CONCURRENCY=2)


@pytest.fixture
def directory():
    return InMemoryEmployeeDirectory([
        EmployeeRecord(id="mgr-1", name="Morgan Lee", level=EngineerLevel.MANAGER),
        EmployeeRecord(id="mgr-2", name="Sam Park", level=EngineerLevel.MANAGER),
        EmployeeRecord(id="emp-1", name="Alex Kim", manager_id="mgr-1", level=EngineerLevel.SENIOR),
        EmployeeRecord(id="emp-2", name="Jordan Diaz", manager_id="mgr-1", level=EngineerLevel.MID),
        EmployeeRecord(id="emp-3", name="Riley Chen", manager_id="mgr-2", level=EngineerLevel.JUNIOR),
    ])


@pytest.fixture
def review_inputs(sample_scores):
    source = InMemoryReviewInputSource()
    source.add_evaluation(ManagerEvaluation(
        cycle_id=CYCLE_ID,
        employee_id="emp-1",
        manager_id="mgr-1",
        scores=sample_scores,
        employee_level=EngineerLevel.SENIOR,
    ))
    source.add_evaluation(ManagerEvaluation(
        cycle_id=CYCLE_ID,
        employee_id="emp-2",
        manager_id="mgr-1",
        scores=PillarScores(2, 2, 2, 2, 2),
        employee_level=EngineerLevel.MID,
    ))
    source.add_peer_feedback(PeerFeedback(
        cycle_id=CYCLE_ID,
        reviewee_id="emp-1",
        reviewer_id="peer-a",
        scores=PillarScores(2, 3, 4, 1, 0),
        strengths="Owns incidents end to end",
    ))
    source.add_peer_feedback(PeerFeedback(
        cycle_id=CYCLE_ID,
        reviewee_id="emp-1",
        reviewer_id="peer-b",
        scores=PillarScores(3, 3, 3, 2, 1),
        growth_areas="Share design docs earlier",
    ))
    return source


@pytest.fixture
def final_score_repository():
    return InMemoryFinalScoreRepository()


@pytest.fixture
def adjustment_repository():
    return InMemoryScoreAdjustmentRequestRepository()


@pytest.fixture
def final_score_service(final_score_repository, review_inputs, directory, settings):
    return FinalScoreService(
        final_score_repository=final_score_repository,
        review_inputs=review_inputs,
        employee_directory=directory,
        settings=settings,
    )


@pytest.fixture
def adjustment_service(adjustment_repository, final_score_repository, directory, settings):
    return ScoreAdjustmentService(
        request_repository=adjustment_repository,
        final_score_repository=final_score_repository,
        employee_directory=directory,
        settings=settings,
    )


@pytest.fixture
def cycle_id():
    return CYCLE_ID
