"""
Post GraphQL type definitions
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

import strawberry

if TYPE_CHECKING:
    from ...dbmodels import Posts


@strawberry.type
class Post:
    """Post type for GraphQL API."""

    id: int
    title: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, post: Posts) -> Post:
        return cls(
            id=post.id,
            title=post.title,
            created_at=post.created_at,
            updated_at=post.updated_at,
        )
