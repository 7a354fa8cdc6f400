"""SQLAlchemy ORM models — one file per table."""

from softcrud.models.article import Article

__all__ = [
    "Article",
]
