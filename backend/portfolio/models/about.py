"""About ORM — singleton owner profile (bio, photo, experience, education).

Invariants:
    - At most one row exists; routes upsert rather than insert
    - bio holds at least one paragraph
"""

import uuid

from sqlalchemy import String, JSON
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from portfolio.db.base import Base, TimestampMixin


class About(TimestampMixin, Base):
    __tablename__ = "about"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    bio: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    short_bio: Mapped[str | None] = mapped_column(String(200), nullable=True)
    photo: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    location: Mapped[str | None] = mapped_column(String(200), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    social_links: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    experience: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    education: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    resumes: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
