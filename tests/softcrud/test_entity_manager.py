"""Tests for EntityManager — soft-delete filtering and not-found translation."""

import uuid
from unittest.mock import AsyncMock

import pytest

from softcrud.dao.article_dao import ArticleDAO
from softcrud.managers.article_manager import ArticleManager
from softcrud.managers.base import EntityManager
from softcrud.services import NotFoundError, StatusCode


@pytest.fixture
def dao():
    return ArticleDAO()


@pytest.fixture
def manager(dao):
    return ArticleManager(dao)


class TestFilters:
    def test_adds_live_filter(self):
        assert EntityManager.filters(title="a") == {"title": "a", "deleted": False}

    def test_cannot_be_overridden(self):
        assert EntityManager.filters(deleted=True) == {"deleted": False}

    def test_get_repository(self, manager, dao):
        assert manager.get_repository() is dao


class TestFindById:
    async def test_returns_live_entity(self, manager, session, make_article):
        article = await make_article(title="a")
        found = await manager.find_by_id(session, article.id)
        assert found is article
        assert found.deleted is False

    async def test_deleted_entity_not_found(self, manager, session, make_article):
        article = await make_article(deleted=True)
        with pytest.raises(NotFoundError, match="resource not found") as exc_info:
            await manager.find_by_id(session, article.id)
        assert exc_info.value.code is StatusCode.RESOURCE_NOT_FOUND

    async def test_missing_id_not_found(self, manager, session):
        with pytest.raises(NotFoundError):
            await manager.find_by_id(session, uuid.uuid4())

    async def test_queries_with_live_predicate(self, session):
        dao = AsyncMock()
        dao.find_one_by = AsyncMock(return_value=object())
        pk = uuid.uuid4()
        await EntityManager(dao).find_by_id(session, pk)
        dao.find_one_by.assert_awaited_once_with(session, id=pk, deleted=False)


class TestFindAll:
    async def test_empty_store(self, manager, session):
        assert await manager.find_all(session) == []

    async def test_excludes_deleted_in_store_order(self, manager, session, make_article):
        await make_article(title="first")
        await make_article(title="gone", deleted=True)
        await make_article(title="second")
        rows = await manager.find_all(session)
        assert [r.title for r in rows] == ["first", "second"]
        assert all(r.deleted is False for r in rows)

    async def test_only_deleted_rows(self, manager, session, make_article):
        await make_article(deleted=True)
        assert await manager.find_all(session) == []


class TestDeleteById:
    async def test_marks_deleted_and_returns_entity(self, manager, session, make_article):
        article = await make_article(title="a")
        deleted = await manager.delete_by_id(session, article.id)
        assert deleted.id == article.id
        assert deleted.deleted is True
        assert deleted.title == "a"

    async def test_subsequent_find_fails(self, manager, session, make_article):
        article = await make_article()
        await manager.delete_by_id(session, article.id)
        with pytest.raises(NotFoundError):
            await manager.find_by_id(session, article.id)

    async def test_row_is_kept(self, manager, dao, session, make_article):
        article = await make_article()
        await manager.delete_by_id(session, article.id)
        assert await dao.find_one_by(session, id=article.id) is not None
        assert len(await dao.find_by(session, deleted=True)) == 1

    async def test_missing_id_raises_without_write(self, session):
        dao = AsyncMock()
        dao.find_one_by = AsyncMock(return_value=None)
        with pytest.raises(NotFoundError):
            await EntityManager(dao).delete_by_id(session, uuid.uuid4())
        dao.persist.assert_not_awaited()
        dao.flush.assert_not_awaited()

    async def test_already_deleted_raises(self, manager, dao, session, make_article):
        article = await make_article()
        await manager.delete_by_id(session, article.id)
        with pytest.raises(NotFoundError):
            await manager.delete_by_id(session, article.id)
        assert len(await dao.find_by(session, deleted=True)) == 1


class TestScenarios:
    async def test_single_entity_lifecycle(self, manager, session, make_article):
        article = await make_article(title="a")

        assert (await manager.find_by_id(session, article.id)).title == "a"

        deleted = await manager.delete_by_id(session, article.id)
        assert (deleted.id, deleted.deleted, deleted.title) == (article.id, True, "a")

        with pytest.raises(NotFoundError):
            await manager.find_by_id(session, article.id)
        assert await manager.find_all(session) == []

    async def test_empty_store(self, manager, session):
        assert await manager.find_all(session) == []
        with pytest.raises(NotFoundError):
            await manager.find_by_id(session, uuid.uuid4())


class TestFindByTitle:
    async def test_skips_deleted(self, manager, session, make_article):
        live = await make_article(title="same")
        await make_article(title="same", deleted=True)
        rows = await manager.find_by_title(session, "same")
        assert [r.id for r in rows] == [live.id]
