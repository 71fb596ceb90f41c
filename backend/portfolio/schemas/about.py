"""About Schemas — the owner profile singleton.

Invariants:
    - bio has at least one non-blank paragraph
    - short_bio is at most 200 chars
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from portfolio.schemas.common import FileRef, ImageRef, new_id


class ExperienceEntry(BaseModel):
    id: str = Field(default_factory=new_id)
    company: str = Field(min_length=1, max_length=200)
    position: str = Field(min_length=1, max_length=200)
    duration: str | None = Field(None, max_length=100)
    description: str | None = Field(None, max_length=5000)
    current: bool = False


class EducationEntry(BaseModel):
    id: str = Field(default_factory=new_id)
    institution: str = Field(min_length=1, max_length=200)
    degree: str | None = Field(None, max_length=200)
    field: str | None = Field(None, max_length=200)
    duration: str | None = Field(None, max_length=100)
    description: str | None = Field(None, max_length=5000)


class AboutUpdate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    title: str = Field(min_length=1, max_length=200)
    bio: list[str] = Field(min_length=1)
    short_bio: str | None = Field(None, max_length=200)
    photo: ImageRef | None = None
    location: str | None = Field(None, max_length=200)
    email: EmailStr | None = None
    phone: str | None = Field(None, max_length=50)
    social_links: dict[str, str] = Field(default_factory=dict)
    experience: list[ExperienceEntry] = Field(default_factory=list)
    education: list[EducationEntry] = Field(default_factory=list)
    resumes: list[FileRef] = Field(default_factory=list)

    @field_validator("bio")
    @classmethod
    def drop_blank_paragraphs(cls, v: list[str]) -> list[str]:
        paragraphs = [p.strip() for p in v if p and p.strip()]
        if not paragraphs:
            raise ValueError("bio must contain at least one paragraph")
        return paragraphs


class AboutResponse(AboutUpdate):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str | None = None
    updated_at: datetime
