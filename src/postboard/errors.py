"""
Storage error classification and application exceptions
"""

from enum import Enum

from sqlalchemy.exc import IntegrityError

# SQLSTATE for unique_violation
PG_UNIQUE_VIOLATION = "23505"

SQLITE_UNIQUE_ERRORS = frozenset({"SQLITE_CONSTRAINT_UNIQUE", "SQLITE_CONSTRAINT_PRIMARYKEY"})


class StorageErrorKind(Enum):
    """What went wrong in the storage layer, as far as callers care."""

    UNIQUE_VIOLATION = "unique_violation"
    OTHER = "other"


class StorageError(RuntimeError):
    """Raised to resolvers' callers when the database could not serve a request.

    The message is safe to show to clients; details go to the log instead.
    """

    def __init__(self, message: str = "Unable to complete request. Please try again later."):
        super().__init__(message)


def _error_codes(orig: BaseException | None) -> set[str]:
    """Collect driver error codes from the DBAPI error and the exception it wraps."""
    codes: set[str] = set()
    seen = 0
    while orig is not None and seen < 3:
        for attr in ("sqlstate", "pgcode", "sqlite_errorname"):
            value = getattr(orig, attr, None)
            if isinstance(value, str) and value:
                codes.add(value)
        orig = orig.__cause__
        seen += 1
    return codes


def classify_integrity_error(error: IntegrityError) -> StorageErrorKind:
    """Classify an IntegrityError by the driver's structured error code."""
    codes = _error_codes(error.orig)
    if PG_UNIQUE_VIOLATION in codes or codes & SQLITE_UNIQUE_ERRORS:
        return StorageErrorKind.UNIQUE_VIOLATION
    return StorageErrorKind.OTHER


def is_unique_violation(error: BaseException) -> bool:
    """Return True when `error` is a unique-constraint violation."""
    return (
        isinstance(error, IntegrityError)
        and classify_integrity_error(error) is StorageErrorKind.UNIQUE_VIOLATION
    )
