"""EntityManager — filtered access to soft-deletable entities."""

from __future__ import annotations

import uuid
from typing import Any, Generic

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from softcrud.dao.base import BaseDAO, ModelT
from softcrud.services import NotFoundError

log = structlog.get_logger(__name__)


class EntityManager(Generic[ModelT]):
    """Mediates every read and delete against one entity type.

    All lookups go through :meth:`filters`, which pins ``deleted=False``
    onto the predicate set, so a soft-deleted row is invisible to every
    method here. Deletion is always logical.
    """

    def __init__(self, dao: BaseDAO[ModelT]) -> None:
        self._dao = dao

    def get_repository(self) -> BaseDAO[ModelT]:
        return self._dao

    @staticmethod
    def filters(**predicates: Any) -> dict[str, Any]:
        """Return *predicates* with the live-row filter applied."""
        return {**predicates, "deleted": False}

    async def find_one_by(self, session: AsyncSession, **predicates: Any) -> ModelT | None:
        return await self._dao.find_one_by(session, **self.filters(**predicates))

    async def find_by(self, session: AsyncSession, **predicates: Any) -> list[ModelT]:
        return await self._dao.find_by(session, **self.filters(**predicates))

    async def find_by_id(self, session: AsyncSession, pk: uuid.UUID) -> ModelT:
        """Return the live entity with primary key *pk*.

        Raises :class:`NotFoundError` if no such row exists or it has been
        soft-deleted.
        """
        entity = await self.find_one_by(session, id=pk)
        if entity is None:
            raise NotFoundError("resource not found")
        return entity

    async def find_all(self, session: AsyncSession) -> list[ModelT]:
        """Return every live entity in store order (may be empty)."""
        return await self.find_by(session)

    async def delete_by_id(self, session: AsyncSession, pk: uuid.UUID) -> ModelT:
        """Soft-delete the entity with primary key *pk* and return it.

        Raises :class:`NotFoundError` (without writing) if the entity is
        missing or already deleted.
        """
        entity = await self.find_by_id(session, pk)
        entity.deleted = True

        await self._dao.persist(session, entity)
        await self._dao.flush(session)
        await session.refresh(entity)

        log.info(
            "entity.soft_deleted",
            entity=type(entity).__name__,
            entity_id=str(entity.id),
        )
        return entity
