"""Site Configuration Lookup — the configuration singleton with defaults filled in."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.models.configuration import Configuration
from portfolio.schemas.configuration import ConfigurationResponse


async def get_configuration_row(db: AsyncSession) -> Configuration | None:
    result = await db.execute(
        select(Configuration).order_by(Configuration.created_at.asc()).limit(1),
    )
    return result.scalar_one_or_none()


async def load_configuration(db: AsyncSession) -> ConfigurationResponse:
    """Stored configuration, or every block at its default when none is stored."""
    row = await get_configuration_row(db)
    if row is None:
        return ConfigurationResponse()
    return ConfigurationResponse.model_validate(row)
