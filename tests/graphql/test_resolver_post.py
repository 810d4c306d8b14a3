"""
Unit tests for post and hello resolvers
"""

from datetime import UTC, datetime
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from postboard.dbmodels import Posts
from postboard.errors import StorageError
from postboard.graphql.resolvers.hello import resolve_hello
from postboard.graphql.resolvers.post import (
    create_post,
    delete_post,
    resolve_post_by_id,
    resolve_posts,
    update_post,
)


@pytest.fixture
def sample_post():
    post = MagicMock(spec=Posts)
    post.id = 3
    post.title = "First post"
    post.created_at = datetime.now(UTC)
    post.updated_at = datetime.now(UTC)
    return post


@pytest.mark.asyncio
async def test_hello():
    assert await resolve_hello() == "hello world"


class TestQueries:
    @pytest.mark.asyncio
    async def test_resolve_posts(self, mock_session, sample_post):
        result = MagicMock()
        result.scalars.return_value.all.return_value = [sample_post]
        mock_session.execute.return_value = result

        posts = await resolve_posts(mock_session)

        assert [p.title for p in posts] == ["First post"]
        assert posts[0].id == 3

    @pytest.mark.asyncio
    async def test_resolve_post_by_id_missing(self, mock_session):
        mock_session.get.return_value = None

        assert await resolve_post_by_id(mock_session, 99) is None
        mock_session.get.assert_awaited_once_with(Posts, 99)

    @pytest.mark.asyncio
    async def test_resolve_post_by_id_found(self, mock_session, sample_post):
        mock_session.get.return_value = sample_post

        post = await resolve_post_by_id(mock_session, 3)

        assert post is not None
        assert post.title == "First post"

    @pytest.mark.asyncio
    async def test_query_failure_raises_storage_error(self, mock_session):
        mock_session.execute.side_effect = OperationalError("SELECT", {}, Exception("gone"))

        with pytest.raises(StorageError):
            await resolve_posts(mock_session)


class TestMutations:
    @pytest.mark.asyncio
    async def test_create_post(self, mock_session):
        def assign_defaults(post):
            post.id = 1
            post.created_at = datetime.now(UTC)
            post.updated_at = datetime.now(UTC)

        mock_session.refresh.side_effect = assign_defaults

        post = await create_post(mock_session, "Hello")

        added = mock_session.add.call_args.args[0]
        assert isinstance(added, Posts)
        assert added.title == "Hello"
        mock_session.commit.assert_awaited_once()
        assert post.id == 1
        assert post.title == "Hello"

    @pytest.mark.asyncio
    async def test_update_missing_post(self, mock_session):
        mock_session.get.return_value = None

        assert await update_post(mock_session, 5, "New") is None
        mock_session.commit.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_post_title(self, mock_session, sample_post):
        mock_session.get.return_value = sample_post

        post = await update_post(mock_session, 3, "Renamed")

        assert sample_post.title == "Renamed"
        assert post.title == "Renamed"
        mock_session.flush.assert_awaited_once()
        mock_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_update_without_title_changes_nothing(self, mock_session, sample_post):
        mock_session.get.return_value = sample_post

        post = await update_post(mock_session, 3, None)

        assert post.title == "First post"
        mock_session.flush.assert_not_called()

    @pytest.mark.asyncio
    async def test_delete_post(self, mock_session):
        mock_session.execute.return_value = MagicMock(rowcount=1)

        assert await delete_post(mock_session, 3) is True
        mock_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_delete_failure_rolls_back(self, mock_session):
        mock_session.execute.side_effect = OperationalError("DELETE", {}, Exception("gone"))

        with pytest.raises(StorageError):
            await delete_post(mock_session, 3)

        mock_session.rollback.assert_awaited_once()
