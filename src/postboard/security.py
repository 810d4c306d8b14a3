"""Password hashing with Argon2 via passlib."""

from __future__ import annotations

import asyncio

from passlib.context import CryptContext
from passlib.exc import UnknownHashError

_password_context = CryptContext(schemes=["argon2"], deprecated="auto")


class PasswordHasher:
    """Hash and verify user passwords using Argon2id."""

    @staticmethod
    def hash(password: str) -> str:
        return _password_context.hash(password)

    @staticmethod
    def verify(password: str, hashed: str) -> bool:
        try:
            return _password_context.verify(password, hashed)
        except (UnknownHashError, ValueError):
            # A digest we cannot parse never matches
            return False


async def hash_password(password: str) -> str:
    """Hash off the event loop; argon2 is deliberately slow."""
    return await asyncio.to_thread(PasswordHasher.hash, password)


async def verify_password(password: str, hashed: str) -> bool:
    return await asyncio.to_thread(PasswordHasher.verify, password, hashed)
