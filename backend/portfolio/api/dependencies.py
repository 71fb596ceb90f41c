"""Route Dependencies — bearer-token auth, role checks, and list parameters.

Invariants:
    - get_current_user raises AuthenticationError (401) for missing/invalid tokens
      and for tokens whose user no longer exists or is inactive
    - require_role raises PermissionDeniedError (403) for authenticated users
      without the role; admin satisfies every role
    - get_optional_user never raises: bad tokens on public routes mean anonymous
"""

import logging
from dataclasses import dataclass
from uuid import UUID

from fastapi import Depends, Query
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.config import Settings, get_settings
from portfolio.core.domain_types import SortOrder, TokenType, UserRole
from portfolio.core.errors import AuthenticationError, PermissionDeniedError
from portfolio.core.security import decode_token
from portfolio.infrastructure.database import get_db
from portfolio.models.user import User

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


async def load_user(db: AsyncSession, user_id: str) -> User | None:
    try:
        uid = UUID(user_id)
    except ValueError:
        return None
    result = await db.execute(select(User).where(User.id == uid))
    return result.scalar_one_or_none()


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> User:
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise AuthenticationError()
    claims = decode_token(credentials.credentials, TokenType.ACCESS, settings)
    user = await load_user(db, claims["sub"])
    if user is None or not user.is_active:
        raise AuthenticationError("User not found or inactive")
    return user


async def get_optional_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> User | None:
    if credentials is None:
        return None
    try:
        return await get_current_user(credentials, db, settings)
    except AuthenticationError:
        return None


def require_role(role: UserRole):
    """Dependency factory: the current user must hold `role` (or be admin)."""

    async def checker(user: User = Depends(get_current_user)) -> User:
        if user.role not in (role.value, UserRole.ADMIN.value):
            logger.warning(
                f"User lacks role {role.value}", extra={"user_id": str(user.id)},
            )
            raise PermissionDeniedError(role.value)
        return user

    return checker


require_editor = require_role(UserRole.EDITOR)
require_admin = require_role(UserRole.ADMIN)


@dataclass
class ListParams:
    page: int
    limit: int
    sort: str | None
    order: SortOrder


def list_params(
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1, le=100),
    sort: str | None = Query(None, max_length=50),
    order: SortOrder = Query(SortOrder.DESC),
    settings: Settings = Depends(get_settings),
) -> ListParams:
    return ListParams(
        page=page,
        limit=min(limit or settings.default_page_size, settings.max_page_size),
        sort=sort,
        order=order,
    )
