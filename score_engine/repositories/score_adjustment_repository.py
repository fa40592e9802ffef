"""
Score Adjustment Request Repository - Performance Review Score Engine
score_engine/repositories/score_adjustment_repository.py
"""

from typing import List, Optional, Protocol, runtime_checkable
from uuid import UUID

from score_engine.models.enumerations import AdjustmentStatus
from score_engine.models.score_adjustment import ScoreAdjustmentRequest
from score_engine.repositories.base import InMemoryRepository


@runtime_checkable
class ScoreAdjustmentRequestRepository(Protocol):
    """Persistence port for score adjustment requests."""

    async def find_by_id(self, request_id: UUID) -> Optional[ScoreAdjustmentRequest]:
        ...

    async def find_pending(self, cycle_id: Optional[str] = None) -> List[ScoreAdjustmentRequest]:
        ...

    async def find_by_employee(
        self, employee_id: str, cycle_id: Optional[str] = None
    ) -> List[ScoreAdjustmentRequest]:
        ...

    async def save(self, request: ScoreAdjustmentRequest) -> ScoreAdjustmentRequest:
        ...


class InMemoryScoreAdjustmentRequestRepository(InMemoryRepository[ScoreAdjustmentRequest]):
    """In-memory ScoreAdjustmentRequestRepository. Results ordered by requested_at."""

    entity_type = "ScoreAdjustmentRequest"

    async def find_pending(self, cycle_id: Optional[str] = None) -> List[ScoreAdjustmentRequest]:
        rows = self._select(
            lambda r: r.status == AdjustmentStatus.PENDING
            and (cycle_id is None or r.cycle_id == cycle_id)
        )
        return sorted(rows, key=lambda r: r.requested_at)

    async def find_by_employee(
        self, employee_id: str, cycle_id: Optional[str] = None
    ) -> List[ScoreAdjustmentRequest]:
        rows = self._select(
            lambda r: r.employee_id == employee_id
            and (cycle_id is None or r.cycle_id == cycle_id)
        )
        return sorted(rows, key=lambda r: r.requested_at)
