"""
Insertion-ordered entity registry.

``EntityStore`` wraps the dictionary that backs one entity collection (users,
servers, public channels, private channels). Iteration order is insertion
order, which the cache's linear ``find_*`` queries rely on.
"""

from __future__ import annotations

from typing import Dict, Generic, List, TypeVar

T = TypeVar("T")


class EntityStore(Generic[T]):
    """Centralized id -> entity mapping for one collection."""

    def __init__(self, kind: str) -> None:
        self.kind = kind
        self._records: Dict[int, T] = {}

    def reset(self) -> None:
        """Drop every entity."""

        self._records.clear()

    def get(self, entity_id: int) -> T | None:
        """Return the entity for ``entity_id`` or ``None``."""

        return self._records.get(entity_id)

    def set(self, entity_id: int, entity: T) -> None:
        """Store ``entity`` under ``entity_id``, replacing any previous one."""

        self._records[entity_id] = entity

    def delete(self, entity_id: int) -> T | None:
        """Remove ``entity_id`` if present and return what was removed."""

        return self._records.pop(entity_id, None)

    def values(self) -> List[T]:
        """Return a snapshot of stored entities in insertion order."""

        return list(self._records.values())

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._records
