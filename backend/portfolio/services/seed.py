"""Admin Seeding — creates the first admin account on an empty users table.

Invariants:
    - Never creates a user when any user already exists
    - Never creates a user without a configured admin_password
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.config import Settings
from portfolio.core.domain_types import UserRole
from portfolio.core.security import hash_password
from portfolio.models.user import User

logger = logging.getLogger(__name__)


async def ensure_admin_user(db: AsyncSession, settings: Settings) -> User | None:
    existing = (await db.execute(select(func.count()).select_from(User))).scalar_one()
    if existing:
        return None
    if not settings.admin_password:
        logger.warning("No users exist and ADMIN_PASSWORD is unset; skipping admin seed")
        return None
    user = User(
        username=settings.admin_username,
        email=settings.admin_email.lower(),
        password_hash=hash_password(settings.admin_password),
        role=UserRole.ADMIN.value,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    logger.info("Seeded admin user", extra={"user_id": str(user.id)})
    return user
