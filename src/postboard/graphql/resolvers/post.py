from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ...dbmodels import Posts
from ...logging import get_logger
from ..types.post import Post
from . import storage_failure

logger = get_logger(__name__)


async def resolve_posts(session: AsyncSession) -> list[Post]:
    """All posts, oldest first."""
    try:
        result = await session.execute(select(Posts).order_by(Posts.id))
        posts = result.scalars().all()
    except SQLAlchemyError as e:
        raise await storage_failure(session, e, "posts") from e

    return [Post.from_model(post) for post in posts]


async def resolve_post_by_id(session: AsyncSession, id: int) -> Post | None:
    try:
        post = await session.get(Posts, id)
    except SQLAlchemyError as e:
        raise await storage_failure(session, e, "post", post_id=id) from e

    if post is None:
        logger.info("Post not found", post_id=id)
        return None
    return Post.from_model(post)


async def create_post(session: AsyncSession, title: str) -> Post:
    post = Posts(title=title)
    session.add(post)
    try:
        await session.flush()
        await session.refresh(post)
        await session.commit()
    except SQLAlchemyError as e:
        raise await storage_failure(session, e, "createPost") from e

    logger.info("Post created", post_id=post.id)
    return Post.from_model(post)


async def update_post(session: AsyncSession, id: int, title: str | None) -> Post | None:
    """
    Update a post's title.

    Returns None when the post does not exist. Leaving `title` out keeps the
    post unchanged.
    """
    try:
        post = await session.get(Posts, id)
        if post is None:
            logger.info("Post not found for update", post_id=id)
            return None

        if title is not None:
            post.title = title
            await session.flush()
            # updated_at is set by the database
            await session.refresh(post)
            await session.commit()
    except SQLAlchemyError as e:
        raise await storage_failure(session, e, "updatePost", post_id=id) from e

    logger.info("Post updated", post_id=id, changed=title is not None)
    return Post.from_model(post)


async def delete_post(session: AsyncSession, id: int) -> bool:
    """Delete a post. Succeeds whether or not the post existed."""
    try:
        result = await session.execute(delete(Posts).where(Posts.id == id))
        await session.commit()
    except SQLAlchemyError as e:
        raise await storage_failure(session, e, "deletePost", post_id=id) from e

    logger.info("Post deleted", post_id=id, rows=result.rowcount)
    return True
