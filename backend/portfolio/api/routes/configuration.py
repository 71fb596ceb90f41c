"""Configuration Routes — site settings singleton.

Invariants:
    - GET never 404s: missing blocks (or a missing row) come back as defaults
    - PUT upserts; there is never more than one configuration row
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.api.dependencies import require_editor
from portfolio.infrastructure.database import get_db
from portfolio.models.configuration import Configuration
from portfolio.models.user import User
from portfolio.schemas.configuration import ConfigurationResponse, ConfigurationUpdate
from portfolio.services.queries import apply_replace, column_values
from portfolio.services.site_config import get_configuration_row, load_configuration

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/configuration", tags=["configuration"])


@router.get("", response_model=ConfigurationResponse)
async def get_configuration(db: AsyncSession = Depends(get_db)):
    return await load_configuration(db)


@router.put("", response_model=ConfigurationResponse)
async def update_configuration(
    body: ConfigurationUpdate,
    user: User = Depends(require_editor),
    db: AsyncSession = Depends(get_db),
):
    row = await get_configuration_row(db)
    if row is None:
        row = Configuration(**column_values(body))
        db.add(row)
    else:
        apply_replace(row, body)
    await db.commit()
    await db.refresh(row)
    logger.info(
        "Configuration saved",
        extra={"resource": "Configuration", "user_id": str(user.id)},
    )
    return ConfigurationResponse.model_validate(row)
