"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All store IO goes through EntityStore; handlers never issue raw SQL
    - Every EntityStore operation is atomic at single-row granularity (commits on its own)
    - find_many takes equality filters only; relations are resolved by foreign-key filters

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: boundary methods are async because implementations do IO,
      but core pure functions that consume their results are never async themselves
"""

from typing import Any, Mapping, Protocol, TypeVar
from uuid import UUID

EntityT = TypeVar("EntityT")


class EntityStore(Protocol[EntityT]):
    """Persistence contract for one entity collection — implemented by shell."""

    async def insert(self, entity: EntityT) -> UUID: ...

    async def find_by_id(self, entity_id: UUID) -> EntityT | None: ...

    async def find_many(
        self,
        filters: Mapping[str, Any] | None = None,
        *,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[EntityT]: ...

    async def update(self, entity_id: UUID, patch: Mapping[str, Any]) -> EntityT: ...

    async def delete(self, entity_id: UUID) -> None: ...
