# tests/test_repositories.py

"""
In-memory repository tests: versioning, soft delete, uniqueness, isolation
"""

import asyncio
from uuid import uuid4

import pytest

from score_engine.core.exceptions import (
    ConcurrentModificationException,
    DuplicateEntityException,
    EntityDeletedException,
    EntityNotFoundException,
)
from score_engine.models import (
    EngineerLevel,
    FinalScore,
    PillarScores,
    ScoreAdjustmentRequest,
    WeightedScore,
)
from score_engine.repositories import (
    FinalScoreRepository,
    InMemoryFinalScoreRepository,
    InMemoryScoreAdjustmentRequestRepository,
    ScoreAdjustmentRequestRepository,
)


def _score(employee_id="emp-1", cycle_id="cycle-2025"):
    return FinalScore.create(
        cycle_id=cycle_id,
        employee_id=employee_id,
        pillar_scores=PillarScores(2, 2, 2, 2, 2),
        weighted_score=WeightedScore.from_value("2"),
        final_level=EngineerLevel.MID,
    )


def _request(employee_id="emp-1", cycle_id="cycle-2025"):
    return ScoreAdjustmentRequest(
        cycle_id=cycle_id,
        employee_id=employee_id,
        requester_id="mgr-1",
        reason="Missed evidence",
        proposed_scores=PillarScores(3, 3, 3, 3, 3),
    )


class TestProtocols:
    """Tests for repository ports."""

    def test_in_memory_adapters_satisfy_ports(self):
        """Test that in-memory adapters satisfy the runtime protocols."""
        assert isinstance(InMemoryFinalScoreRepository(), FinalScoreRepository)
        assert isinstance(
            InMemoryScoreAdjustmentRequestRepository(), ScoreAdjustmentRequestRepository
        )


class TestFinalScoreRepository:
    """Tests for InMemoryFinalScoreRepository."""

    def test_save_assigns_version(self):
        """Test that the first save assigns version 1."""
        async def scenario():
            repo = InMemoryFinalScoreRepository()
            saved = await repo.save(_score())
            assert saved.version == 1
            found = await repo.find_by_id(saved.id)
            assert found.version == 1
            assert found.employee_id == "emp-1"

        asyncio.run(scenario())

    def test_stale_version_rejected(self):
        """Test that a stale version is rejected and stored state kept."""
        async def scenario():
            repo = InMemoryFinalScoreRepository()
            saved = await repo.save(_score())
            first = await repo.find_by_id(saved.id)
            second = await repo.find_by_id(saved.id)

            first.lock()
            await repo.save(first)

            second.mark_feedback_delivered("mgr-1")
            with pytest.raises(ConcurrentModificationException) as exc_info:
                await repo.save(second)
            assert exc_info.value.expected == 1
            assert exc_info.value.actual == 2

            stored = await repo.find_by_id(saved.id)
            assert stored.locked
            assert not stored.feedback_delivered

        asyncio.run(scenario())

    def test_returned_copies_are_isolated(self):
        """Test that mutating returned objects does not touch stored state."""
        async def scenario():
            repo = InMemoryFinalScoreRepository()
            original = _score()
            saved = await repo.save(original)

            original.lock()
            saved.lock()
            stored = await repo.find_by_id(saved.id)
            assert not stored.locked

        asyncio.run(scenario())

    def test_duplicate_cycle_employee_rejected(self):
        """Test that a second score for the same cycle and employee is rejected."""
        async def scenario():
            repo = InMemoryFinalScoreRepository()
            await repo.save(_score())
            with pytest.raises(DuplicateEntityException):
                await repo.save(_score())

        asyncio.run(scenario())

    def test_same_employee_in_other_cycle_allowed(self):
        """Test that the same employee may be scored in another cycle."""
        async def scenario():
            repo = InMemoryFinalScoreRepository()
            await repo.save(_score(cycle_id="cycle-2025"))
            await repo.save(_score(cycle_id="cycle-2026"))
            assert len(await repo.find_by_cycle("cycle-2025")) == 1
            assert len(await repo.find_by_cycle("cycle-2026")) == 1

        asyncio.run(scenario())

    def test_find_by_cycle_sorted_by_employee(self):
        """Test that cycle results are sorted by employee id."""
        async def scenario():
            repo = InMemoryFinalScoreRepository()
            for employee_id in ("emp-3", "emp-1", "emp-2"):
                await repo.save(_score(employee_id=employee_id))
            rows = await repo.find_by_cycle("cycle-2025")
            assert [r.employee_id for r in rows] == ["emp-1", "emp-2", "emp-3"]

        asyncio.run(scenario())

    def test_find_by_cycle_and_employee_missing(self):
        """Test that a missing key returns None."""
        async def scenario():
            repo = InMemoryFinalScoreRepository()
            assert await repo.find_by_cycle_and_employee("cycle-2025", "emp-9") is None

        asyncio.run(scenario())

    def test_soft_delete_hides_record(self):
        """Test that soft-deleted scores are hidden and read-only."""
        async def scenario():
            repo = InMemoryFinalScoreRepository()
            saved = await repo.save(_score())
            await repo.soft_delete(saved.id)

            assert await repo.find_by_id(saved.id) is None
            assert await repo.find_by_cycle_and_employee("cycle-2025", "emp-1") is None
            assert await repo.find_by_cycle("cycle-2025") == []

            with pytest.raises(EntityDeletedException):
                await repo.save(saved)
            with pytest.raises(EntityDeletedException):
                await repo.soft_delete(saved.id)

            # the natural key is free again
            replacement = await repo.save(_score())
            assert replacement.id != saved.id

        asyncio.run(scenario())

    def test_soft_delete_unknown_id(self):
        """Test that deleting an unknown id raises not found."""
        async def scenario():
            repo = InMemoryFinalScoreRepository()
            with pytest.raises(EntityNotFoundException):
                await repo.soft_delete(uuid4())

        asyncio.run(scenario())


class TestScoreAdjustmentRequestRepository:
    """Tests for InMemoryScoreAdjustmentRequestRepository."""

    def test_find_pending_filters_status_and_cycle(self):
        """Test that find_pending filters by status and cycle."""
        async def scenario():
            repo = InMemoryScoreAdjustmentRequestRepository()
            pending = await repo.save(_request())
            other_cycle = await repo.save(_request(cycle_id="cycle-2026"))
            reviewed = _request(employee_id="emp-2")
            reviewed.approve("admin-1")
            await repo.save(reviewed)

            all_pending = await repo.find_pending()
            assert {r.id for r in all_pending} == {pending.id, other_cycle.id}

            cycle_pending = await repo.find_pending("cycle-2025")
            assert [r.id for r in cycle_pending] == [pending.id]

        asyncio.run(scenario())

    def test_find_by_employee_ordered_by_request_time(self, tick_clock):
        """Test that employee history is ordered by request time."""
        async def scenario():
            repo = InMemoryScoreAdjustmentRequestRepository()
            later = _request()
            earlier = _request()
            later.requested_at = tick_clock.replace(hour=12)
            earlier.requested_at = tick_clock
            await repo.save(later)
            await repo.save(earlier)
            await repo.save(_request(employee_id="emp-2"))

            rows = await repo.find_by_employee("emp-1")
            assert [r.id for r in rows] == [earlier.id, later.id]
            assert await repo.find_by_employee("emp-1", cycle_id="cycle-2026") == []

        asyncio.run(scenario())


class TestRepositoryErrors:
    """Tests for repository error messages and attributes."""

    def test_not_found_names_type_and_key(self):
        """Test that not-found errors carry the entity type and lookup key."""
        error = EntityNotFoundException("FinalScore", "cycle-2025/emp-1")
        assert error.entity_type == "FinalScore"
        assert error.entity_id == "cycle-2025/emp-1"
        assert str(error) == "No FinalScore found for cycle-2025/emp-1"

    def test_deleted_message(self):
        """Test that deleted-record errors name the record."""
        error = EntityDeletedException("ScoreAdjustmentRequest", "req-1")
        assert str(error) == "ScoreAdjustmentRequest req-1 was soft-deleted and is read-only"

    def test_duplicate_default_message(self):
        """Test that the duplicate error defaults to the (cycle, employee) wording."""
        assert str(DuplicateEntityException()) == (
            "Final score already recorded for this cycle and employee"
        )

    def test_concurrent_modification_versions(self):
        """Test that version conflicts expose both versions."""
        error = ConcurrentModificationException("FinalScore", "fs-1", 1, 2)
        assert (error.expected, error.actual) == (1, 2)
        assert "expected version 1, found 2" in str(error)
