"""ArticleManager — live-article lookups."""

from sqlalchemy.ext.asyncio import AsyncSession

from softcrud.managers.base import EntityManager
from softcrud.models.article import Article


class ArticleManager(EntityManager[Article]):
    async def find_by_title(self, session: AsyncSession, title: str) -> list[Article]:
        """Return live articles whose title matches exactly."""
        return await self.find_by(session, title=title)
