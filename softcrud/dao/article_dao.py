"""ArticleDAO — articles table operations."""

from softcrud.dao.base import BaseDAO
from softcrud.models.article import Article


class ArticleDAO(BaseDAO[Article]):
    model = Article
