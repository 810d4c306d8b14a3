#!/usr/bin/env python3
"""
Main CLI entry point for Postboard backend server.
"""

import click
import uvicorn

from postboard import __version__
from postboard.config import settings
from postboard.logging import configure_logging, get_logger

logger = get_logger(__name__)


def bootstrap(database_url: str | None = None):
    """Prepare everything the server needs before it accepts traffic.

    Initializes the database engine, applies pending migrations and builds
    the app (which validates the GraphQL schema). Returns the app.
    """
    from postboard.database import ensure_migrated, init_database

    init_database(database_url)
    if settings.run_migrations_on_startup:
        ensure_migrated(database_url)

    from postboard.api.app import app

    return app


@click.group()
@click.version_option(version=__version__, prog_name="postboard")
def cli() -> None:
    """Postboard CLI - run the server and manage the database."""
    pass


@cli.command()
@click.option(
    "--host",
    default=None,
    help="Host to bind to (default: POSTBOARD_API_HOST or 0.0.0.0)",
)
@click.option(
    "--port",
    default=None,
    type=int,
    help="Port to bind to (default: PORT or 5000)",
)
@click.option(
    "--reload",
    is_flag=True,
    default=False,
    help="Enable auto-reload for development",
)
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: POSTBOARD_LOG_LEVEL or info)",
)
def serve(host: str | None, port: int | None, reload: bool, log_level: str | None) -> None:
    """Start the Postboard API server."""
    host = host or settings.api_host
    port = port or settings.api_port
    log_level = (log_level or settings.log_level).lower()

    configure_logging(debug=settings.debug, log_level=log_level)

    # Startup problems are logged, not retried
    try:
        app = bootstrap()

        logger.info("Server running", host=host, port=port, reload=reload)
        if reload:
            uvicorn.run(
                "postboard.api.app:app",
                host=host,
                port=port,
                reload=True,
                log_level=log_level,
            )
        else:
            uvicorn.run(app, host=host, port=port, log_level=log_level)
    except KeyboardInterrupt:
        logger.info("Server shutdown requested by user")
    except Exception:
        logger.exception("Server startup failed")


@cli.group()
def migrate() -> None:
    """Manage database migrations."""
    pass


@migrate.command()
@click.argument("revision", default="head")
@click.option("--database-url", default=None, help="Override POSTBOARD_DATABASE_URL")
def upgrade(revision: str, database_url: str | None) -> None:
    """Upgrade database to a revision (default: head)."""
    from postboard.database.migrations import run_migrations

    configure_logging(debug=settings.debug, log_level=settings.log_level)
    try:
        run_migrations(revision, database_url)
    except Exception as e:
        logger.error("Database upgrade failed", error=str(e))
        raise click.ClickException(f"Database upgrade failed: {e}") from e
    click.echo(f"✓ Database upgraded to {revision}")


@migrate.command()
@click.argument("revision", default="-1")
@click.option("--database-url", default=None, help="Override POSTBOARD_DATABASE_URL")
def downgrade(revision: str, database_url: str | None) -> None:
    """Downgrade database to a revision (default: -1)."""
    from postboard.database.migrations import downgrade_migrations

    configure_logging(debug=settings.debug, log_level=settings.log_level)
    try:
        downgrade_migrations(revision, database_url)
    except Exception as e:
        logger.error("Database downgrade failed", error=str(e))
        raise click.ClickException(f"Database downgrade failed: {e}") from e
    click.echo(f"✓ Database downgraded to {revision}")


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
