"""
Main FastAPI application for Postboard backend
"""

import asyncio
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..config import settings
from ..database import ensure_migrated, init_database
from ..database.connection import check_database_connection, dispose_database
from ..logging import configure_logging, get_logger, logging_configured
from ..middleware import LoggingContextMiddleware

# The CLI configures logging itself; only do it when imported by another runner
if not logging_configured():
    configure_logging(debug=settings.debug, log_level=settings.log_level)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    logger.info("Starting Postboard API...")
    init_database()

    if settings.run_migrations_on_startup:
        # Alembic runs its own event loop, so keep it off ours
        if await asyncio.to_thread(ensure_migrated):
            logger.info("Database migrations applied at startup")

    ok, error = await check_database_connection()
    if not ok:
        logger.warning("Database connection check failed", error=error)

    yield

    # Shutdown
    logger.info("Shutting down Postboard API...")
    await dispose_database()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="Postboard API",
        description="GraphQL API for users and posts",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )

    app.add_middleware(LoggingContextMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health_check():  # pyright: ignore [reportUnusedFunction]
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    # GraphQL endpoint (allow disabling for tests)
    if not os.getenv("POSTBOARD_DISABLE_GRAPHQL"):
        try:
            from ..graphql.schema import create_graphql_router, validate_schema

            logger.info("Validating GraphQL schema...")
            validate_schema()

            app.include_router(create_graphql_router(), prefix="")
            logger.info("GraphQL endpoint initialized successfully", endpoint="/graphql")
        except Exception as e:  # pragma: no cover
            logger.error("Failed to initialize GraphQL endpoint", error=str(e))
            # Server should not start with a broken schema
            raise

    return app


# Create the main application instance
app = create_app()
