"""Resolver package for GraphQL schema.

Resolver functions take the request-scoped session explicitly; the root
Query and Mutation types pull it from the GraphQL context and pass it in.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from ...errors import StorageError
from ...logging import get_logger

logger = get_logger(__name__)


async def storage_failure(
    session: AsyncSession, error: Exception, operation: str, **details: object
) -> StorageError:
    """Roll back, log the real cause, and return the client-safe error to raise."""
    await session.rollback()
    logger.error(
        "Storage operation failed",
        operation=operation,
        error=str(error),
        error_type=type(error).__name__,
        exc_info=error,
        **details,
    )
    return StorageError()
