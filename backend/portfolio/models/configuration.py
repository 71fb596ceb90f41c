"""Configuration ORM — singleton site settings edited from the admin panel.

Invariants:
    - At most one row exists; GET falls back to schema defaults when absent
    - Every block is a JSON object validated by schemas/configuration.py
"""

import uuid

from sqlalchemy import JSON
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from portfolio.db.base import Base, TimestampMixin


class Configuration(TimestampMixin, Base):
    __tablename__ = "configuration"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    site_info: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    contact_info: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    social_links: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    stats: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    seo: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    theme: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    settings: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    navigation: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    footer: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
