"""Authentication API endpoints.

- POST /auth/register  -- Create an account, returns a JWT and the user
- POST /auth/login     -- Email/password login, returns a JWT and the user
- GET  /auth/profile   -- Current user info (requires auth)
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field, field_validator
from sqlalchemy.ext.asyncio import AsyncSession

from notewise.database import get_db
from notewise.models import User
from notewise.services.auth_service import create_user_token, get_current_user
from notewise.services.user_service import (
    BCRYPT_MAX_PASSWORD_BYTES,
    authenticate,
    create_user,
    get_user_by_email,
    get_user_by_id,
)
from notewise.utils.datetime_utils import datetime_to_iso

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


# ---------------------------------------------------------------------------
# Request / Response schemas
# ---------------------------------------------------------------------------


class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(..., min_length=6)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        if len(value.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes")
        return value


class LoginRequest(BaseModel):
    email: str
    password: str


class UserInfo(BaseModel):
    id: int
    name: str
    email: str


class AuthResponse(BaseModel):
    token: str
    user: UserInfo


class ProfileResponse(UserInfo):
    created_at: str | None = None


def _auth_response(user: User) -> AuthResponse:
    return AuthResponse(
        token=create_user_token(user.id, user.email),
        user=UserInfo(id=user.id, name=user.name, email=user.email),
    )


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    request: RegisterRequest,
    db: AsyncSession = Depends(get_db),  # noqa: B008
) -> AuthResponse:
    """Create an account and log it in."""
    if await get_user_by_email(db, request.email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User already exists",
        )

    user = await create_user(db, email=request.email, password=request.password, name=request.name)
    logger.info("Registered user id=%s", user.id)
    return _auth_response(user)


@router.post("/login", response_model=AuthResponse)
async def login(
    request: LoginRequest,
    db: AsyncSession = Depends(get_db),  # noqa: B008
) -> AuthResponse:
    """Authenticate with email/password."""
    user = await authenticate(db, request.email, request.password)
    if user is None:
        logger.warning("Login failed for email=%s", request.email)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid credentials",
        )

    logger.info("User logged in: id=%s", user.id)
    return _auth_response(user)


@router.get("/profile", response_model=ProfileResponse)
async def profile(
    current_user: dict = Depends(get_current_user),  # noqa: B008
    db: AsyncSession = Depends(get_db),  # noqa: B008
) -> ProfileResponse:
    """Return the authenticated user's profile (never the password hash)."""
    user = await get_user_by_id(db, current_user["user_id"])
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )

    return ProfileResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        created_at=datetime_to_iso(user.created_at),
    )
