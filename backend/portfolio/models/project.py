"""Project ORM — portfolio projects with embedded images, reports and files.

Invariants:
    - title, description, short_description are non-nullable
    - images, reports, project_files are JSON arrays of sub-documents, each with an "id"
    - category / status hold ProjectCategory / ProjectStatus values
    - order sorts ascending in the default public listing

Design Decisions:
    - JSON columns for sub-document arrays: they are always read and written
      with their parent and never queried on their own
"""

import uuid

from sqlalchemy import String, Text, Integer, Boolean, JSON
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from portfolio.db.base import Base, TimestampMixin


class Project(TimestampMixin, Base):
    __tablename__ = "projects"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    short_description: Mapped[str] = mapped_column(String(500), nullable=False)
    technologies: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    images: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    live_urls: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    github_urls: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    category: Mapped[str] = mapped_column(String(20), nullable=False, default="web")
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="completed",
    )
    visible: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    completed_at_institution: Mapped[str | None] = mapped_column(
        String(200), nullable=True,
    )
    reports: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    project_files: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
