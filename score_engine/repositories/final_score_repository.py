"""
Final Score Repository - Performance Review Score Engine
score_engine/repositories/final_score_repository.py

One live FinalScore per (cycle_id, employee_id).
"""

from typing import List, Optional, Protocol, runtime_checkable
from uuid import UUID

from score_engine.core.exceptions import DuplicateEntityException
from score_engine.models.final_score import FinalScore
from score_engine.repositories.base import InMemoryRepository


@runtime_checkable
class FinalScoreRepository(Protocol):
    """Persistence port for final scores."""

    async def find_by_id(self, final_score_id: UUID) -> Optional[FinalScore]:
        ...

    async def find_by_cycle_and_employee(self, cycle_id: str, employee_id: str) -> Optional[FinalScore]:
        ...

    async def find_by_cycle(self, cycle_id: str) -> List[FinalScore]:
        ...

    async def save(self, final_score: FinalScore) -> FinalScore:
        """Upsert by id. Raises ConcurrentModificationException on a stale version."""
        ...

    async def soft_delete(self, final_score_id: UUID) -> None:
        ...


class InMemoryFinalScoreRepository(InMemoryRepository[FinalScore]):
    """In-memory FinalScoreRepository."""

    entity_type = "FinalScore"

    def _check_unique(self, entity: FinalScore) -> None:
        for record in self._live():
            if (
                record.id != entity.id
                and record.cycle_id == entity.cycle_id
                and record.employee_id == entity.employee_id
            ):
                raise DuplicateEntityException(
                    f"Final score for employee {entity.employee_id} in cycle "
                    f"{entity.cycle_id} already exists with ID {record.id}"
                )

    async def find_by_cycle_and_employee(self, cycle_id: str, employee_id: str) -> Optional[FinalScore]:
        matches = self._select(
            lambda r: r.cycle_id == cycle_id and r.employee_id == employee_id
        )
        return matches[0] if matches else None

    async def find_by_cycle(self, cycle_id: str) -> List[FinalScore]:
        rows = self._select(lambda r: r.cycle_id == cycle_id)
        return sorted(rows, key=lambda r: r.employee_id)
