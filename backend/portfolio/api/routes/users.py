"""User Routes — admin-only account management.

Invariants:
    - Every operation requires the admin role
    - Emails are unique (409 on duplicates)
    - An admin can neither delete nor deactivate their own account
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.api.dependencies import require_admin
from portfolio.core.errors import ConflictError, ValidationFailedError
from portfolio.core.security import hash_password
from portfolio.infrastructure.database import get_db
from portfolio.models.user import User
from portfolio.schemas.auth import UserCreate, UserResponse, UserUpdate
from portfolio.services.queries import get_or_404

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.get("", response_model=list[UserResponse])
async def list_users(
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    result = await db.execute(select(User).order_by(User.created_at.asc()))
    return result.scalars().all()


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    body: UserCreate,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    existing = await db.execute(select(User.id).where(User.email == body.email))
    if existing.first() is not None:
        raise ConflictError(f"A user with email '{body.email}' already exists")
    user = User(
        username=body.username,
        email=body.email,
        password_hash=hash_password(body.password),
        role=body.role.value,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    logger.info(
        f"User created with role {user.role}",
        extra={"resource": "User", "resource_id": str(user.id), "user_id": str(admin.id)},
    )
    return user


@router.patch("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: UUID,
    body: UserUpdate,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    user = await get_or_404(db, User, user_id)
    if user.id == admin.id and body.is_active is False:
        raise ValidationFailedError("You cannot deactivate your own account", "is_active")
    if body.username is not None:
        user.username = body.username
    if body.password is not None:
        user.password_hash = hash_password(body.password)
    if body.role is not None:
        user.role = body.role.value
    if body.is_active is not None:
        user.is_active = body.is_active
    await db.commit()
    await db.refresh(user)
    return user


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: UUID,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    user = await get_or_404(db, User, user_id)
    if user.id == admin.id:
        raise ValidationFailedError("You cannot delete your own account", "user_id")
    await db.delete(user)
    await db.commit()
    logger.info(
        "User deleted",
        extra={"resource": "User", "resource_id": str(user_id), "user_id": str(admin.id)},
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
