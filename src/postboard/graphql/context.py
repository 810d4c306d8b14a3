"""
Per-request GraphQL context
"""

from typing import Any

import strawberry
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from ..database.connection import get_db_session
from ..logging import get_logger

logger = get_logger(__name__)


async def get_context(
    request: Request, session: AsyncSession = Depends(get_db_session)
) -> dict[str, Any]:
    """Build the context for GraphQL resolvers: the request and its own session."""
    return {
        "request": request,
        "session": session,
    }


def get_session_from_info(info: strawberry.Info) -> AsyncSession:
    """Pull the request-scoped session out of the resolver context."""
    session = info.context.get("session")
    if session is None:
        logger.error("Database session not found in GraphQL context")
        raise RuntimeError("Database session not available")
    return session
