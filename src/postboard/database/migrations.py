"""
Programmatic Alembic access used at startup and by the CLI
"""

from pathlib import Path

from alembic import command
from alembic.config import Config

from ..config import get_database_url
from ..logging import get_logger

logger = get_logger(__name__)

MIGRATIONS_DIR = Path(__file__).resolve().parent.parent / "migrations"


def get_alembic_config(database_url: str | None = None) -> Config:
    """Build an Alembic config pointing at the migrations shipped with the package.

    No ini file is read, so this works from an installed wheel as well as a checkout.
    """
    config = Config()
    config.set_main_option("script_location", str(MIGRATIONS_DIR))
    url = database_url or get_database_url()
    # configparser interpolation treats % specially
    config.set_main_option("sqlalchemy.url", url.replace("%", "%%"))
    return config


def run_migrations(revision: str = "head", database_url: str | None = None) -> None:
    """Upgrade the database to `revision`.

    Blocks until done. env.py drives its own event loop, so call this from a
    thread (or a sync context), never from inside a running loop.
    """
    config = get_alembic_config(database_url)
    logger.info("Applying database migrations", revision=revision)
    command.upgrade(config, revision)
    logger.info("Database migrations applied", revision=revision)


def downgrade_migrations(revision: str = "-1", database_url: str | None = None) -> None:
    """Downgrade the database to `revision`."""
    config = get_alembic_config(database_url)
    logger.info("Downgrading database", revision=revision)
    command.downgrade(config, revision)
    logger.info("Database downgrade completed", revision=revision)


_migrated = False


def ensure_migrated(database_url: str | None = None) -> bool:
    """Run `upgrade head` once per process.

    Returns True if migrations ran now, False if they already had.
    """
    global _migrated
    if _migrated:
        return False
    run_migrations("head", database_url)
    _migrated = True
    return True
