"""EntityService — validated create / update for soft-deletable entities."""

from __future__ import annotations

from typing import Any, Generic

import pydantic
import structlog
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from softcrud.core.database import IMMUTABLE_FIELDS
from softcrud.dao.base import BaseDAO, ModelT
from softcrud.services import ValidationError

log = structlog.get_logger(__name__)


def _format_errors(exc: pydantic.ValidationError) -> str:
    messages = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err["loc"]) or "body"
        messages.append(f"{loc}: {err['msg']}")
    return "; ".join(messages)


class EntityService(Generic[ModelT]):
    """Stateless create/update service. Subclasses set the two schemas.

    Request data arrives as a decoded dict (or ``None`` when the body was
    empty or malformed). It is validated against ``create_schema`` /
    ``update_schema`` before anything touches the session.
    """

    create_schema: type[BaseModel]
    update_schema: type[BaseModel]

    def __init__(self, dao: BaseDAO[ModelT]) -> None:
        self._dao = dao

    def _validate(self, schema: type[BaseModel], data: Any) -> BaseModel:
        if not isinstance(data, dict):
            raise ValidationError("request body must be a JSON object")
        forbidden = sorted(IMMUTABLE_FIELDS.intersection(data))
        if forbidden:
            raise ValidationError(f"immutable field(s) cannot be set: {', '.join(forbidden)}")
        try:
            return schema.model_validate(data)
        except pydantic.ValidationError as exc:
            raise ValidationError(_format_errors(exc)) from exc

    async def create_from_dict_validate_and_persist(
        self, session: AsyncSession, data: Any
    ) -> ModelT:
        """Validate *data* and persist a new entity.

        Raises :class:`ValidationError` on a non-object body or schema failure.
        """
        validated = self._validate(self.create_schema, data)
        entity = await self._dao.create(session, **validated.model_dump())
        log.info(
            "entity.created",
            entity=type(entity).__name__,
            entity_id=str(entity.id),
        )
        return entity

    async def update_from_dict_validate_and_persist(
        self, session: AsyncSession, entity: ModelT, data: Any
    ) -> ModelT:
        """Merge the fields present in *data* into *entity* and persist it.

        Fields absent from the body are left untouched (PUT and PATCH share
        this merge semantics).
        """
        validated = self._validate(self.update_schema, data)
        changes = validated.model_dump(include=validated.model_fields_set)
        for key, val in changes.items():
            setattr(entity, key, val)

        await self._dao.persist(session, entity)
        await self._dao.flush(session)
        await session.refresh(entity)

        log.info(
            "entity.updated",
            entity=type(entity).__name__,
            entity_id=str(entity.id),
            fields=sorted(changes),
        )
        return entity
