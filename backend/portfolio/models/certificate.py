"""Certificate ORM — credentials with attached files and linked projects.

Invariants:
    - title, issuer, issue_date are non-nullable
    - files is a JSON array; at most one entry should carry is_primary=True
    - linked_project_ids holds project UUIDs as strings
"""

import uuid
from datetime import date

from sqlalchemy import String, Text, Boolean, Date, JSON
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from portfolio.db.base import Base, TimestampMixin


class Certificate(TimestampMixin, Base):
    __tablename__ = "certificates"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    issuer: Mapped[str] = mapped_column(String(200), nullable=False)
    issue_date: Mapped[date] = mapped_column(Date, nullable=False)
    expiry_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    credential_id: Mapped[str | None] = mapped_column(String(200), nullable=True)
    credential_url: Mapped[str | None] = mapped_column(String(2000), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    image: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    files: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    skills: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    category: Mapped[str] = mapped_column(
        String(20), nullable=False, default="certification",
    )
    visible: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    linked_project_ids: Mapped[list] = mapped_column(
        JSON, nullable=False, default=list,
    )
    completed_at_institution: Mapped[str | None] = mapped_column(
        String(200), nullable=True,
    )
