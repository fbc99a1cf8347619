"""Pydantic schemas for registration and login endpoints."""
from pydantic import BaseModel, EmailStr, Field, field_validator

from core.security import MAX_PASSWORD_BYTES


class RegisterRequest(BaseModel):
    """
    Schema for registering a new user.

    `EmailStr` lowercases the domain part; the local part is kept as sent.
    """

    email: EmailStr
    password: str = Field(..., min_length=12)

    @field_validator("password")
    @classmethod
    def validate_password_bytes(cls, v: str) -> str:
        """Reject passwords bcrypt would silently truncate."""
        if len(v.encode()) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return v


class LoginRequest(BaseModel):
    """
    Schema for logging in.

    No upper bound on the password: anything longer than a registered
    password could be is simply wrong credentials.
    """

    email: EmailStr
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """
    Response carrying a freshly issued session token.

    The token is only shown once; send it back in the `x-token` header.
    """

    token: str
