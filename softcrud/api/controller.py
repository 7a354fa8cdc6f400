"""ApiController — binds HTTP verbs to generic entity operations.

A concrete controller supplies its manager, its service and the schema
its entities are serialized through; the five routes come for free::

    POST        /            -> create_action
    GET         /            -> list_action
    GET         /{entity_id} -> get_action
    PUT|PATCH   /{entity_id} -> update_action
    DELETE      /{entity_id} -> delete_action

The collection routes also answer without the trailing slash, so a mount
at /api/v1/articles serves both /api/v1/articles and /api/v1/articles/.
A controller's router must therefore be included with a prefix.
"""

from __future__ import annotations

import abc
import json
import uuid
from typing import Any

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.responses import Response

from softcrud.api.deps import get_session
from softcrud.api.serializer import check_format, serialize
from softcrud.managers.base import EntityManager
from softcrud.services.base import EntityService


class ApiController(abc.ABC):
    """Abstract CRUD controller. Subclasses set ``response_schema``."""

    response_schema: type[BaseModel]

    def __init__(self) -> None:
        check_format(self.get_serialization_format())
        self.router = APIRouter()
        for path, in_schema in (("/", True), ("", False)):
            self.router.add_api_route(
                path,
                self.create_action,
                methods=["POST"],
                status_code=201,
                include_in_schema=in_schema,
            )
            self.router.add_api_route(
                path, self.list_action, methods=["GET"], include_in_schema=in_schema
            )
        self.router.add_api_route("/{entity_id}", self.get_action, methods=["GET"])
        self.router.add_api_route("/{entity_id}", self.update_action, methods=["PUT"])
        self.router.add_api_route("/{entity_id}", self.update_action, methods=["PATCH"])
        self.router.add_api_route(
            "/{entity_id}", self.delete_action, methods=["DELETE"], status_code=204
        )

    @abc.abstractmethod
    def get_entity_manager(self) -> EntityManager:
        """Return the manager used for reads and deletes."""

    @abc.abstractmethod
    def get_entity_service(self) -> EntityService:
        """Return the service used for validated create / update."""

    def get_serialization_format(self) -> str:
        return "json"

    def _serialize(self, data: Any, status_code: int = 200) -> Response:
        return serialize(
            data, self.get_serialization_format(), self.response_schema, status_code
        )

    @staticmethod
    async def get_request_content_as_dict(request: Request) -> dict | None:
        """Decode the request body as a JSON object.

        An empty, malformed or too deeply nested body, or one that is not an
        object, yields ``None``; it is passed on as-is and rejected by the
        service.
        """
        raw = await request.body()
        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError, RecursionError):
            return None
        return data if isinstance(data, dict) else None

    # ── actions ──────────────────────────────────────────────────────────

    async def create_action(
        self,
        request: Request,
        session: AsyncSession = Depends(get_session),
    ) -> Response:
        data = await self.get_request_content_as_dict(request)
        entity = await self.get_entity_service().create_from_dict_validate_and_persist(
            session, data
        )
        return self._serialize(entity, status_code=201)

    async def update_action(
        self,
        entity_id: uuid.UUID,
        request: Request,
        session: AsyncSession = Depends(get_session),
    ) -> Response:
        data = await self.get_request_content_as_dict(request)
        existing = await self.get_entity_manager().find_by_id(session, entity_id)
        updated = await self.get_entity_service().update_from_dict_validate_and_persist(
            session, existing, data
        )
        return self._serialize(updated)

    async def delete_action(
        self,
        entity_id: uuid.UUID,
        session: AsyncSession = Depends(get_session),
    ) -> Response:
        await self.get_entity_manager().delete_by_id(session, entity_id)
        return Response(status_code=204)

    async def get_action(
        self,
        entity_id: uuid.UUID,
        session: AsyncSession = Depends(get_session),
    ) -> Response:
        entity = await self.get_entity_manager().find_by_id(session, entity_id)
        return self._serialize(entity)

    async def list_action(
        self,
        session: AsyncSession = Depends(get_session),
    ) -> Response:
        entities = await self.get_entity_manager().find_all(session)
        return self._serialize(entities)
