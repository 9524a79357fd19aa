"""Entity Store — SQLAlchemy implementation of core.repository_protocols.EntityStore.

Invariants:
    - One SqlEntityStore per (AsyncSession, ORM model) pair
    - insert/update/delete commit immediately: atomic at single-row granularity
    - Any IntegrityError on write is rolled back and surfaced as DatabaseError
      (uniqueness races that slipped past the handler pre-check become a 500)
    - find_many filters are equality-only; unknown field names raise ValueError
      before a query is issued

Design Decisions:
    - Generic class over per-entity repositories: the five collections share the
      exact same five operations, relations are expressed as foreign-key filters
    - None-valued filters compile to IS NULL so "accepted_bid_id": None works
    - Relationships load lazily; callers that walk one pass loader options to
      find_by_id/get_or_404
"""

import logging
from typing import Any, Generic, Mapping, Sequence, TypeVar
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.interfaces import ORMOption

from lawconnect.core.errors import DatabaseError, ResourceNotFoundError
from lawconnect.db.base import Base

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class SqlEntityStore(Generic[ModelT]):
    """Store for one ORM model, bound to the request's AsyncSession."""

    def __init__(self, db: AsyncSession, model: type[ModelT]):
        self.db = db
        self.model = model
        self._columns = set(model.__table__.columns.keys())

    @property
    def resource_type(self) -> str:
        return self.model.__name__

    async def insert(self, entity: ModelT) -> UUID:
        self.db.add(entity)
        await self._commit("insert")
        await self.db.refresh(entity)
        return entity.id

    async def find_by_id(
        self, entity_id: UUID, *, options: Sequence[ORMOption] = (),
    ) -> ModelT | None:
        """Loader options (e.g. selectinload) force a fresh load of the row."""
        return await self.db.get(
            self.model, entity_id,
            options=list(options) or None, populate_existing=bool(options),
        )

    async def get_or_404(
        self, entity_id: UUID, *, options: Sequence[ORMOption] = (),
    ) -> ModelT:
        entity = await self.find_by_id(entity_id, options=options)
        if entity is None:
            raise ResourceNotFoundError(self.resource_type, str(entity_id))
        return entity

    async def find_one(self, filters: Mapping[str, Any]) -> ModelT | None:
        rows = await self.find_many(filters, limit=1)
        return rows[0] if rows else None

    async def find_many(
        self,
        filters: Mapping[str, Any] | None = None,
        *,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[ModelT]:
        query = select(self.model)
        for name, value in (filters or {}).items():
            column = self._column(name)
            query = query.where(column.is_(None) if value is None else column == value)
        if order_by:
            column = self._column(order_by)
            query = query.order_by(column.desc() if descending else column.asc())
        if offset:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def update(self, entity_id: UUID, patch: Mapping[str, Any]) -> ModelT:
        entity = await self.get_or_404(entity_id)
        for name, value in patch.items():
            self._column(name)
            setattr(entity, name, value)
        await self._commit("update")
        await self.db.refresh(entity)
        return entity

    async def delete(self, entity_id: UUID) -> None:
        entity = await self.get_or_404(entity_id)
        await self.db.delete(entity)
        await self._commit("delete")

    def _column(self, name: str):
        if name not in self._columns:
            raise ValueError(f"{self.resource_type} has no column '{name}'")
        return getattr(self.model, name)

    async def _commit(self, operation: str) -> None:
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.error(
                f"{self.resource_type} {operation} violated a constraint: {e.orig}",
                extra={"resource_type": self.resource_type, "error_code": "DATABASE_ERROR"},
            )
            raise DatabaseError("Integrity constraint violated", operation)
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                f"{self.resource_type} {operation} failed: {e}",
                extra={"resource_type": self.resource_type, "error_code": "DATABASE_ERROR"},
            )
            raise DatabaseError("Database operation failed", operation)
