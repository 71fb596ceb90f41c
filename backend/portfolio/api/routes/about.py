"""About Routes — the owner profile singleton."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.api.dependencies import require_editor
from portfolio.core.errors import ResourceNotFoundError
from portfolio.infrastructure.database import get_db
from portfolio.models.about import About
from portfolio.models.user import User
from portfolio.presentation.media_urls import image_variants
from portfolio.schemas.about import AboutResponse, AboutUpdate
from portfolio.services.queries import apply_replace, column_values

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/about", tags=["about"])

PHOTO_WIDTH = 400


async def _get_about(db: AsyncSession) -> About | None:
    result = await db.execute(select(About).order_by(About.created_at.asc()).limit(1))
    return result.scalar_one_or_none()


def serialize(about: About) -> dict:
    data = AboutResponse.model_validate(about).model_dump(mode="json")
    photo = about.photo or {}
    data["view"] = {
        "photo": (
            image_variants(photo["url"], width=PHOTO_WIDTH, alt=photo.get("alt") or about.name)
            if photo.get("url") else None
        ),
    }
    return data


@router.get("")
async def get_about(db: AsyncSession = Depends(get_db)):
    about = await _get_about(db)
    if about is None:
        raise ResourceNotFoundError("About", "singleton")
    return serialize(about)


@router.put("")
async def upsert_about(
    body: AboutUpdate,
    user: User = Depends(require_editor),
    db: AsyncSession = Depends(get_db),
):
    about = await _get_about(db)
    if about is None:
        about = About(**column_values(body))
        db.add(about)
    else:
        apply_replace(about, body)
    await db.commit()
    await db.refresh(about)
    logger.info("About saved", extra={"resource": "About", "user_id": str(user.id)})
    return serialize(about)
