"""Registration and login endpoints (no token required)."""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session
from api.errors import ErrorContextRoute
from schemas.auth import LoginRequest, RegisterRequest, TokenResponse
from services import auth_service
from services.exceptions import (
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    UserNotFoundError,
)

router = APIRouter(prefix="/auth", tags=["auth"], route_class=ErrorContextRoute)


@router.post("/register", response_model=TokenResponse)
async def register(
    data: RegisterRequest,
    db: AsyncSession = Depends(get_async_session),
) -> TokenResponse:
    """
    Register a new user and return their first session token.

    Returns 409 if the email is already registered.
    """
    try:
        token = await auth_service.register_user(db, data.email, data.password)
    except EmailAlreadyRegisteredError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        ) from e
    return TokenResponse(token=token)


@router.post("/login", response_model=TokenResponse)
async def login(
    data: LoginRequest,
    db: AsyncSession = Depends(get_async_session),
) -> TokenResponse:
    """
    Log in and return a new session token, invalidating the previous one.

    Unknown email and wrong password both return 401.
    """
    try:
        token = await auth_service.login(db, data.email, data.password)
    except (UserNotFoundError, InvalidCredentialsError) as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        ) from e
    return TokenResponse(token=token)
