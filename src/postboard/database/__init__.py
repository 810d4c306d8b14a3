"""
Database module for Postboard backend
"""

from .connection import get_async_session, get_db_session, init_database
from .migrations import ensure_migrated, run_migrations

__all__ = [
    "ensure_migrated",
    "get_async_session",
    "get_db_session",
    "init_database",
    "run_migrations",
]
