"""Authentication gate: resolves the x-token header to a user."""
import logging

from fastapi import Depends, HTTPException, status
from fastapi.security import APIKeyHeader
from sqlalchemy.ext.asyncio import AsyncSession

from db.session import get_async_session
from models.user import User
from services import auth_service

logger = logging.getLogger(__name__)

TOKEN_HEADER = "x-token"

# Header names are case-insensitive; auto_error=False so we control the 401 body
token_header = APIKeyHeader(name=TOKEN_HEADER, auto_error=False)


def unauthorized() -> HTTPException:
    """Same response for every failure so callers can't tell why they were rejected."""
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authenticated",
    )


async def get_current_user(
    token: str | None = Depends(token_header),
    db: AsyncSession = Depends(get_async_session),
) -> User:
    """
    Dependency that validates the session token and returns the current user.

    Routes that need a user declare this dependency and pass the returned
    user on to the service layer explicitly. Registration, login and health
    routes don't declare it.

    Raises:
        HTTPException: 401 if the header is missing, empty, or the token is unknown.
    """
    if not token:
        logger.info("Rejected request without %s header", TOKEN_HEADER)
        raise unauthorized()

    user = await auth_service.resolve_token(db, token)
    if user is None:
        logger.info("Rejected request with unknown token")
        raise unauthorized()

    return user
