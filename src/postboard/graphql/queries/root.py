"""
Root GraphQL query definitions
"""

import strawberry

from ..context import get_session_from_info
from ..types.post import Post


@strawberry.type
class Query:
    """Root GraphQL query type."""

    @strawberry.field
    async def hello(self) -> str:
        """Liveness greeting."""
        from ..resolvers.hello import resolve_hello

        return await resolve_hello()

    @strawberry.field
    async def posts(self, info: strawberry.Info) -> list[Post]:
        """All posts."""
        from ..resolvers.post import resolve_posts

        return await resolve_posts(get_session_from_info(info))

    @strawberry.field
    async def post(self, info: strawberry.Info, id: int) -> Post | None:
        """Get a post by ID."""
        from ..resolvers.post import resolve_post_by_id

        return await resolve_post_by_id(get_session_from_info(info), id)
