"""Service layer for registration, login and session token resolution."""
import asyncio
import logging

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.security import generate_token, hash_password, hash_token, verify_password
from models.user import User
from services.exceptions import (
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    UserNotFoundError,
)

logger = logging.getLogger(__name__)


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    """Get a user by exact email."""
    result = await db.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def register_user(
    db: AsyncSession,
    email: str,
    password: str,
) -> str:
    """
    Register a new user and issue their first session token.

    Args:
        db: Database session.
        email: Email address, already validated by the request schema.
        password: Plaintext password. Never logged.

    Returns:
        The plaintext session token.

    Raises:
        EmailAlreadyRegisteredError: If a user with this email exists.

    Note:
        Does not commit. Caller (session generator) handles commit at request end.
    """
    if await get_user_by_email(db, email) is not None:
        raise EmailAlreadyRegisteredError()

    # bcrypt is deliberately slow; keep it off the event loop
    password_hash = await asyncio.to_thread(hash_password, password)
    plaintext, token_hash = generate_token()

    user = User(email=email, password_hash=password_hash, token_hash=token_hash)
    db.add(user)
    try:
        await db.flush()
    except IntegrityError as e:
        await db.rollback()
        # Race condition: another request registered the same email between
        # our SELECT and INSERT
        if "uq_users_email" in str(e):
            raise EmailAlreadyRegisteredError() from e
        raise

    logger.info("Registered user %s", user.id)
    return plaintext


async def login(
    db: AsyncSession,
    email: str,
    password: str,
) -> str:
    """
    Verify credentials and issue a new session token.

    The new token replaces the previous one, so any earlier token stops
    working immediately.

    Raises:
        UserNotFoundError: If no user has this email.
        InvalidCredentialsError: If the password does not match.
    """
    user = await get_user_by_email(db, email)
    if user is None:
        logger.info("Login attempt for unknown email")
        raise UserNotFoundError()

    if not await asyncio.to_thread(verify_password, password, user.password_hash):
        logger.info("Login attempt with wrong password for user %s", user.id)
        raise InvalidCredentialsError()

    plaintext, token_hash = generate_token()
    user.token_hash = token_hash
    user.updated_at = func.clock_timestamp()
    await db.flush()
    await db.refresh(user)

    logger.info("User %s logged in", user.id)
    return plaintext


async def resolve_token(
    db: AsyncSession,
    plaintext_token: str,
) -> User | None:
    """
    Return the user currently holding a token, or None.

    Hashes the input token before database lookup, so the query never
    compares plaintext tokens.
    """
    result = await db.execute(
        select(User).where(User.token_hash == hash_token(plaintext_token)),
    )
    return result.scalar_one_or_none()
