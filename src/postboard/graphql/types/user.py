"""
User GraphQL type definitions
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

import strawberry

if TYPE_CHECKING:
    from ...dbmodels import Users


@strawberry.type
class User:
    """User type for GraphQL API. The password digest is never exposed."""

    id: int
    username: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, user: Users) -> User:
        return cls(
            id=user.id,
            username=user.username,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


@strawberry.type
class FieldError:
    """A single user-facing validation or business-rule failure."""

    message: str


@strawberry.type
class UserResponse:
    """Either a list of field errors or a user, never both.

    Build instances with `failure()` or `success()` so only one side is set.
    """

    errors: list[FieldError] | None = None
    user: User | None = None

    @classmethod
    def failure(cls, *messages: str) -> UserResponse:
        if not messages:
            raise ValueError("A failed response needs at least one message")
        return cls(errors=[FieldError(message=message) for message in messages])

    @classmethod
    def success(cls, user: User) -> UserResponse:
        return cls(user=user)
