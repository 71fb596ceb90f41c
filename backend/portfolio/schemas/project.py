"""Project Schemas — create/update payloads with field-level limits.

Invariants:
    - title 1-200 chars, short_description 1-500 chars, both stripped
    - URL lists drop blank entries
    - a "file" report needs file_url; a "link" report needs link_url
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from portfolio.core.domain_types import ProjectCategory, ProjectStatus, ReportType
from portfolio.schemas.common import FileRef, ImageRef, new_id


def _clean_list(values: list[str]) -> list[str]:
    return [v.strip() for v in values if v and v.strip()]


class Report(BaseModel):
    id: str = Field(default_factory=new_id)
    title: str = Field(min_length=1, max_length=200)
    description: str | None = Field(None, max_length=2000)
    type: ReportType
    file_url: str | None = Field(None, max_length=2000)
    public_id: str | None = Field(None, max_length=300)
    link_url: str | None = Field(None, max_length=2000)
    platform: str | None = Field(None, max_length=50)
    visible: bool = True

    @model_validator(mode="after")
    def validate_type_fields(self):
        if self.type == ReportType.FILE and not self.file_url:
            raise ValueError("file report requires file_url")
        if self.type == ReportType.LINK and not self.link_url:
            raise ValueError("link report requires link_url")
        return self


class ProjectBase(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1, max_length=20_000)
    short_description: str = Field(min_length=1, max_length=500)
    technologies: list[str] = Field(default_factory=list, max_length=50)
    images: list[ImageRef] = Field(default_factory=list, max_length=30)
    live_urls: list[str] = Field(default_factory=list, max_length=10)
    github_urls: list[str] = Field(default_factory=list, max_length=10)
    featured: bool = False
    category: ProjectCategory = ProjectCategory.WEB
    status: ProjectStatus = ProjectStatus.COMPLETED
    visible: bool = True
    order: int = 0
    completed_at_institution: str | None = Field(None, max_length=200)
    reports: list[Report] = Field(default_factory=list)
    project_files: list[FileRef] = Field(default_factory=list)

    @field_validator("title", "short_description")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("cannot be empty or whitespace")
        return v

    @field_validator("technologies", "live_urls", "github_urls")
    @classmethod
    def drop_blank(cls, v: list[str]) -> list[str]:
        return _clean_list(v)


class ProjectCreate(ProjectBase):
    pass


class ProjectUpdate(BaseModel):
    """Partial update: only fields present in the request body are applied."""
    title: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, min_length=1, max_length=20_000)
    short_description: str | None = Field(None, min_length=1, max_length=500)
    technologies: list[str] | None = None
    images: list[ImageRef] | None = None
    live_urls: list[str] | None = None
    github_urls: list[str] | None = None
    featured: bool | None = None
    category: ProjectCategory | None = None
    status: ProjectStatus | None = None
    visible: bool | None = None
    order: int | None = None
    completed_at_institution: str | None = Field(None, max_length=200)
    reports: list[Report] | None = None
    project_files: list[FileRef] | None = None

    @field_validator("title", "short_description")
    @classmethod
    def strip_text(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("cannot be empty or whitespace")
        return v

    @field_validator("technologies", "live_urls", "github_urls")
    @classmethod
    def drop_blank(cls, v: list[str] | None) -> list[str] | None:
        return _clean_list(v) if v is not None else v


class ProjectResponse(ProjectBase):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    created_at: datetime
    updated_at: datetime
