"""Generic base DAO — predicate lookups and unit-of-work helpers (ORM)."""

from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from softcrud.core.database import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseDAO(Generic[ModelT]):
    """Base data-access object. Subclasses set ``model`` class attribute.

    This is the only path into storage: managers and services never
    build queries of their own.
    """

    model: type[ModelT]

    def _where(self, stmt, predicates: dict[str, Any]):
        """Append one equality clause per predicate to *stmt*."""
        column_keys = set(self.model.__mapper__.column_attrs.keys())
        for key, val in predicates.items():
            if key not in column_keys:
                raise AttributeError(f"{self.model.__name__} has no column '{key}'")
            stmt = stmt.where(getattr(self.model, key) == val)
        return stmt

    async def find_one_by(self, session: AsyncSession, **predicates: Any) -> ModelT | None:
        """Return the first row matching all *predicates*, or None.

        Usage::

            article = await dao.find_one_by(session, id=pk, deleted=False)

        Raises ``ValueError`` if called without any predicates.
        """
        if not predicates:
            raise ValueError("find_one_by() requires at least one predicate")
        stmt = self._where(select(self.model), predicates)
        result = await session.execute(stmt)
        return result.scalars().first()

    async def find_by(self, session: AsyncSession, **predicates: Any) -> list[ModelT]:
        """Return every row matching all *predicates*, in store order."""
        stmt = self._where(select(self.model), predicates)
        result = await session.execute(stmt)
        return list(result.scalars().all())

    async def persist(self, session: AsyncSession, obj: ModelT) -> None:
        session.add(obj)

    async def flush(self, session: AsyncSession) -> None:
        await session.flush()

    async def create(self, session: AsyncSession, **values: Any) -> ModelT:
        obj = self.model(**values)
        session.add(obj)
        await session.flush()
        await session.refresh(obj)
        return obj

