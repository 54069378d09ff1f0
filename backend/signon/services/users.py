"""User store queries and the registration/login operations."""
from __future__ import annotations

import logging

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from signon.core.security import Hasher, PasswordHasher
from signon.models.user import User
from signon.schemas.user import AuthResponse, LoginInput, PublicUser, RegisterInput

logger = logging.getLogger(__name__)

REGISTERED_MESSAGE = "User registered successfully"
LOGIN_MESSAGE = "Login successful"
INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"


async def find_by_username_or_email(session: AsyncSession, username: str, email: str) -> list[User]:
    result = await session.execute(
        select(User).where(or_(User.username == username, User.email == email)).order_by(User.id)
    )
    return list(result.scalars().all())


async def find_by_email(session: AsyncSession, email: str) -> User | None:
    result = await session.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def insert_user(session: AsyncSession, username: str, email: str, password_hash: str) -> User:
    """Insert a user row and return it with id and timestamps populated.

    Unique-constraint violations surface as ``IntegrityError`` from the flush.
    """

    user = User(username=username, email=email, password_hash=password_hash)
    session.add(user)
    await session.flush()
    await session.refresh(user)
    return user


def _duplicate_response(existing: list[User], username: str) -> AuthResponse:
    # The lowest-id conflicting row decides the label; username wins on that row.
    field = "username" if existing[0].username == username else "email"
    return AuthResponse(success=False, message=f"User with this {field} already exists")


async def register_user(
    session: AsyncSession,
    payload: RegisterInput,
    hasher: Hasher | None = None,
) -> AuthResponse:
    hasher = hasher or PasswordHasher()

    existing = await find_by_username_or_email(session, payload.username, payload.email)
    if existing:
        logger.info("Registration rejected for %s: duplicate account", payload.username)
        return _duplicate_response(existing, payload.username)

    password_hash = await run_in_threadpool(hasher.hash, payload.password)
    try:
        user = await insert_user(session, payload.username, payload.email, password_hash)
    except IntegrityError:
        # Another registration committed the same username/email after our lookup.
        await session.rollback()
        existing = await find_by_username_or_email(session, payload.username, payload.email)
        if not existing:
            raise
        logger.info("Registration rejected for %s: lost uniqueness race", payload.username)
        return _duplicate_response(existing, payload.username)

    logger.info("Registered user %s (id=%s)", user.username, user.id)
    return AuthResponse(success=True, message=REGISTERED_MESSAGE, user=PublicUser.model_validate(user))


async def login_user(
    session: AsyncSession,
    payload: LoginInput,
    hasher: Hasher | None = None,
) -> AuthResponse:
    hasher = hasher or PasswordHasher()

    user = await find_by_email(session, payload.email)
    if user is None or not await run_in_threadpool(hasher.verify, payload.password, user.password_hash):
        logger.info("Login rejected for %s", payload.email)
        return AuthResponse(success=False, message=INVALID_CREDENTIALS_MESSAGE)

    logger.info("User %s logged in", user.username)
    return AuthResponse(success=True, message=LOGIN_MESSAGE, user=PublicUser.model_validate(user))
