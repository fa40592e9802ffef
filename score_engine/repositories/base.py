"""
Base Repository - Performance Review Score Engine
score_engine/repositories/base.py

In-memory persistence shared by the repository adapters:
  - records are stored and returned as deep copies
  - save() is an upsert by id guarded by an optimistic version check
  - delete is soft; deleted records are invisible to finders

The async methods never await internally, so each call is atomic on the
event loop.
"""

from typing import Callable, Dict, Generic, List, Optional, Set, TypeVar
from uuid import UUID

from pydantic import BaseModel

from score_engine.core.exceptions import (
    ConcurrentModificationException,
    EntityDeletedException,
    EntityNotFoundException,
)

T = TypeVar("T", bound=BaseModel)


class InMemoryRepository(Generic[T]):
    """Versioned in-memory store keyed by entity id."""

    entity_type: str = "Entity"

    def __init__(self):
        self._records: Dict[UUID, T] = {}
        self._deleted: Set[UUID] = set()

    def _copy(self, entity: T) -> T:
        return entity.model_copy(deep=True)

    def _live(self) -> List[T]:
        return [r for rid, r in self._records.items() if rid not in self._deleted]

    def _select(self, predicate: Callable[[T], bool]) -> List[T]:
        return [self._copy(r) for r in self._live() if predicate(r)]

    def _check_unique(self, entity: T) -> None:
        """Hook for natural-key uniqueness checks."""
        pass

    async def find_by_id(self, entity_id: UUID) -> Optional[T]:
        if entity_id in self._deleted:
            return None
        record = self._records.get(entity_id)
        return self._copy(record) if record is not None else None

    async def save(self, entity: T) -> T:
        """
        Upsert by id.

        Raises:
            EntityDeletedException: the id was soft-deleted
            ConcurrentModificationException: entity.version is stale
        """
        if entity.id in self._deleted:
            raise EntityDeletedException(self.entity_type, str(entity.id))

        stored = self._records.get(entity.id)
        current = stored.version if stored is not None else 0
        if entity.version != current:
            raise ConcurrentModificationException(
                self.entity_type, str(entity.id), entity.version, current
            )
        self._check_unique(entity)

        entity.version = current + 1
        self._records[entity.id] = self._copy(entity)
        return self._copy(entity)

    async def soft_delete(self, entity_id: UUID) -> None:
        if entity_id not in self._records:
            raise EntityNotFoundException(self.entity_type, str(entity_id))
        if entity_id in self._deleted:
            raise EntityDeletedException(self.entity_type, str(entity_id))
        self._deleted.add(entity_id)
