"""Initial schema — users, projects, certificates, skills, about, configuration, contact.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("username", sa.String(50), nullable=False),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("role", sa.String(20), nullable=False, server_default="admin"),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default="true"),
        *_timestamps(),
    )

    op.create_table(
        "projects",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("short_description", sa.String(500), nullable=False),
        sa.Column("technologies", sa.JSON, nullable=False),
        sa.Column("images", sa.JSON, nullable=False),
        sa.Column("live_urls", sa.JSON, nullable=False),
        sa.Column("github_urls", sa.JSON, nullable=False),
        sa.Column("featured", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("category", sa.String(20), nullable=False, server_default="web"),
        sa.Column("status", sa.String(20), nullable=False, server_default="completed"),
        sa.Column("visible", sa.Boolean, nullable=False, server_default="true"),
        sa.Column("order", sa.Integer, nullable=False, server_default="0"),
        sa.Column("completed_at_institution", sa.String(200), nullable=True),
        sa.Column("reports", sa.JSON, nullable=False),
        sa.Column("project_files", sa.JSON, nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_projects_visible_order", "projects", ["visible", "order"])

    op.create_table(
        "certificates",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("issuer", sa.String(200), nullable=False),
        sa.Column("issue_date", sa.Date, nullable=False),
        sa.Column("expiry_date", sa.Date, nullable=True),
        sa.Column("credential_id", sa.String(200), nullable=True),
        sa.Column("credential_url", sa.String(2000), nullable=True),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("image", sa.JSON, nullable=True),
        sa.Column("files", sa.JSON, nullable=False),
        sa.Column("skills", sa.JSON, nullable=False),
        sa.Column("category", sa.String(20), nullable=False, server_default="certification"),
        sa.Column("visible", sa.Boolean, nullable=False, server_default="true"),
        sa.Column("linked_project_ids", sa.JSON, nullable=False),
        sa.Column("completed_at_institution", sa.String(200), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_certificates_visible_issue_date", "certificates", ["visible", "issue_date"])

    op.create_table(
        "skills",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("category", sa.String(20), nullable=False, server_default="other"),
        sa.Column("level", sa.Integer, nullable=True),
        sa.Column("icon", sa.String(200), nullable=True),
        sa.Column("color", sa.String(20), nullable=False, server_default="#3B82F6"),
        sa.Column("group", sa.String(20), nullable=False, server_default="technical"),
        sa.Column("visible", sa.Boolean, nullable=False, server_default="true"),
        sa.Column("source", sa.String(20), nullable=False, server_default="manual"),
        *_timestamps(),
    )
    op.create_index("ix_skills_lower_name", "skills", [sa.text("lower(name)")], unique=True)

    op.create_table(
        "about",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("bio", sa.JSON, nullable=False),
        sa.Column("short_bio", sa.String(200), nullable=True),
        sa.Column("photo", sa.JSON, nullable=True),
        sa.Column("location", sa.String(200), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("social_links", sa.JSON, nullable=False),
        sa.Column("experience", sa.JSON, nullable=False),
        sa.Column("education", sa.JSON, nullable=False),
        sa.Column("resumes", sa.JSON, nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "configuration",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("site_info", sa.JSON, nullable=False),
        sa.Column("contact_info", sa.JSON, nullable=False),
        sa.Column("social_links", sa.JSON, nullable=False),
        sa.Column("stats", sa.JSON, nullable=False),
        sa.Column("seo", sa.JSON, nullable=False),
        sa.Column("theme", sa.JSON, nullable=False),
        sa.Column("settings", sa.JSON, nullable=False),
        sa.Column("navigation", sa.JSON, nullable=False),
        sa.Column("footer", sa.JSON, nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "contact_messages",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("subject", sa.String(200), nullable=True),
        sa.Column("message", sa.Text, nullable=False),
        sa.Column("is_read", sa.Boolean, nullable=False, server_default="false"),
        *_timestamps(),
    )
    op.create_index("ix_contact_messages_is_read", "contact_messages", ["is_read"])


def downgrade() -> None:
    op.drop_table("contact_messages")
    op.drop_table("configuration")
    op.drop_table("about")
    op.drop_index("ix_skills_lower_name", table_name="skills")
    op.drop_table("skills")
    op.drop_table("certificates")
    op.drop_table("projects")
    op.drop_table("users")
