"""Articles router."""

from __future__ import annotations

from softcrud.api.controller import ApiController
from softcrud.api.deps import get_article_manager, get_article_service
from softcrud.api.schemas.article import ArticleResponse
from softcrud.managers.article_manager import ArticleManager
from softcrud.services.article_service import ArticleService


class ArticleController(ApiController):
    response_schema = ArticleResponse

    def __init__(self, manager: ArticleManager, service: ArticleService) -> None:
        self._manager = manager
        self._service = service
        super().__init__()

    def get_entity_manager(self) -> ArticleManager:
        return self._manager

    def get_entity_service(self) -> ArticleService:
        return self._service


controller = ArticleController(get_article_manager(), get_article_service())
router = controller.router
