from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ...dbmodels import Users
from ...errors import is_unique_violation
from ...logging import bind_user_id, get_logger
from ...security import hash_password, verify_password
from ..types.user import User, UserResponse
from . import storage_failure

if TYPE_CHECKING:
    from ..mutations.root import UserInput

logger = get_logger(__name__)

MIN_USERNAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 8

USERNAME_TOO_SHORT = "Username must be at least 3 characters long."
PASSWORD_TOO_SHORT = "Password must be at least 8 characters long."
USERNAME_TAKEN = "Username already exists."
INVALID_CREDENTIALS = "Invalid credentials."


# Verified against when the username is unknown so both failures cost the same
_dummy_digest: str | None = None


async def get_dummy_digest() -> str:
    global _dummy_digest
    if _dummy_digest is None:
        _dummy_digest = await hash_password("postboard-dummy-password")
    return _dummy_digest


def text_length(value: str) -> int:
    """Length in UTF-16 code units, the way browser clients count characters."""
    return len(value.encode("utf-16-le", errors="surrogatepass")) // 2


def validate_registration(username: str, password: str) -> str | None:
    """Return the first validation message that applies, or None."""
    if text_length(username) < MIN_USERNAME_LENGTH:
        return USERNAME_TOO_SHORT
    if text_length(password) < MIN_PASSWORD_LENGTH:
        return PASSWORD_TOO_SHORT
    return None


async def register(session: AsyncSession, options: UserInput) -> UserResponse:
    """
    Register a new user.

    Input is validated before anything is hashed or stored. A taken username
    comes back as a field error; any other storage failure raises StorageError.
    """
    problem = validate_registration(options.username, options.password)
    if problem is not None:
        return UserResponse.failure(problem)

    digest = await hash_password(options.password)
    user = Users(username=options.username, password=digest)
    session.add(user)

    try:
        await session.flush()
        await session.refresh(user)
        await session.commit()
    except IntegrityError as e:
        if is_unique_violation(e):
            await session.rollback()
            logger.info("Registration rejected, username taken", username=options.username)
            return UserResponse.failure(USERNAME_TAKEN)
        raise await storage_failure(session, e, "register", username=options.username) from e
    except SQLAlchemyError as e:
        raise await storage_failure(session, e, "register", username=options.username) from e

    bind_user_id(user.id)
    logger.info("User registered", user_id=user.id, username=user.username)
    return UserResponse.success(User.from_model(user))


async def login(session: AsyncSession, options: UserInput) -> UserResponse:
    """
    Check a username/password pair.

    Unknown usernames and wrong passwords produce the same response.
    """
    try:
        result = await session.execute(
            select(Users).where(Users.username == options.username).limit(1)
        )
        user = result.scalar_one_or_none()
    except SQLAlchemyError as e:
        raise await storage_failure(session, e, "login", username=options.username) from e

    if user is None:
        await verify_password(options.password, await get_dummy_digest())
        logger.info("Login failed", username=options.username)
        return UserResponse.failure(INVALID_CREDENTIALS)

    if not await verify_password(options.password, user.password):
        logger.info("Login failed", username=options.username)
        return UserResponse.failure(INVALID_CREDENTIALS)

    bind_user_id(user.id)
    logger.info("User logged in", user_id=user.id)
    return UserResponse.success(User.from_model(user))
