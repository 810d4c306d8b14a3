"""
Root GraphQL mutation definitions
"""

import strawberry

from ..context import get_session_from_info
from ..types.post import Post
from ..types.user import UserResponse


# Input types for mutations
@strawberry.input
class UserInput:
    """Credentials for register and login. The password is never stored as given."""

    username: str
    password: str


@strawberry.type
class Mutation:
    """Root GraphQL mutation type."""

    # User mutations
    @strawberry.mutation
    async def register(
        self, info: strawberry.Info, options: UserInput
    ) -> UserResponse:
        """Create an account."""
        from ..resolvers.user import register

        return await register(get_session_from_info(info), options)

    @strawberry.mutation
    async def login(self, info: strawberry.Info, options: UserInput) -> UserResponse:
        """Check credentials."""
        from ..resolvers.user import login

        return await login(get_session_from_info(info), options)

    # Post mutations
    @strawberry.mutation(name="createPost")
    async def create_post(self, info: strawberry.Info, title: str) -> Post:
        """Create a new post."""
        from ..resolvers.post import create_post

        return await create_post(get_session_from_info(info), title)

    @strawberry.mutation(name="updatePost")
    async def update_post(
        self, info: strawberry.Info, id: int, title: str | None = None
    ) -> Post | None:
        """Change a post's title."""
        from ..resolvers.post import update_post

        return await update_post(get_session_from_info(info), id, title)

    @strawberry.mutation(name="deletePost")
    async def delete_post(self, info: strawberry.Info, id: int) -> bool:
        """Delete a post."""
        from ..resolvers.post import delete_post

        return await delete_post(get_session_from_info(info), id)
