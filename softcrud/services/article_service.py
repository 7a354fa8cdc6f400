"""ArticleService — article create/update validation."""

from softcrud.api.schemas.article import CreateArticleRequest, UpdateArticleRequest
from softcrud.models.article import Article
from softcrud.services.base import EntityService


class ArticleService(EntityService[Article]):
    create_schema = CreateArticleRequest
    update_schema = UpdateArticleRequest
