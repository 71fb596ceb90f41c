"""Auth Routes — login, token refresh, current user.

Invariants:
    - Unknown email and wrong password give the same 401 (no account probing)
    - Refresh only accepts refresh tokens; login returns both token types
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.api.dependencies import load_user, get_current_user
from portfolio.config import Settings, get_settings
from portfolio.core.domain_types import TokenType
from portfolio.core.errors import AuthenticationError
from portfolio.core.security import create_token, decode_token, verify_password
from portfolio.infrastructure.database import get_db
from portfolio.models.user import User
from portfolio.schemas.auth import (
    LoginRequest, RefreshRequest, TokenResponse, UserResponse,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post("/login", response_model=TokenResponse)
async def login(
    body: LoginRequest,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    result = await db.execute(select(User).where(User.email == body.email))
    user = result.scalar_one_or_none()
    if user is None or not user.is_active or not verify_password(
        body.password, user.password_hash,
    ):
        logger.warning("Failed login attempt")
        raise AuthenticationError("Invalid credentials")
    logger.info("User logged in", extra={"user_id": str(user.id)})
    return TokenResponse(
        token=create_token(str(user.id), user.role, TokenType.ACCESS, settings),
        refresh_token=create_token(str(user.id), user.role, TokenType.REFRESH, settings),
        user=UserResponse.model_validate(user),
    )


@router.post("/refresh", response_model=TokenResponse)
async def refresh(
    body: RefreshRequest,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    claims = decode_token(body.refresh_token, TokenType.REFRESH, settings)
    user = await load_user(db, claims["sub"])
    if user is None or not user.is_active:
        raise AuthenticationError("User not found or inactive")
    return TokenResponse(
        token=create_token(str(user.id), user.role, TokenType.ACCESS, settings),
        user=UserResponse.model_validate(user),
    )


@router.get("/me", response_model=UserResponse)
async def me(user: User = Depends(get_current_user)):
    return user
