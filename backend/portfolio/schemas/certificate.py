"""Certificate Schemas — create/update payloads.

Invariants:
    - expiry_date, when given, is not before issue_date
    - skills accept JSON-encoded string arrays and are flattened on input
"""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from portfolio.core.domain_types import CertificateCategory
from portfolio.presentation.adapters import parse_skills
from portfolio.schemas.common import FileRef, ImageRef


class CertificateBase(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    issuer: str = Field(min_length=1, max_length=200)
    issue_date: date
    expiry_date: date | None = None
    credential_id: str | None = Field(None, max_length=200)
    credential_url: str | None = Field(None, max_length=2000)
    description: str | None = Field(None, max_length=5000)
    image: ImageRef | None = None
    files: list[FileRef] = Field(default_factory=list, max_length=10)
    skills: list[str] = Field(default_factory=list)
    category: CertificateCategory = CertificateCategory.CERTIFICATION
    visible: bool = True
    linked_project_ids: list[UUID] = Field(default_factory=list)
    completed_at_institution: str | None = Field(None, max_length=200)

    @field_validator("skills", mode="before")
    @classmethod
    def flatten_skills(cls, v):
        return parse_skills(v)

    @model_validator(mode="after")
    def validate_dates(self):
        if self.expiry_date and self.expiry_date < self.issue_date:
            raise ValueError("expiry_date cannot be before issue_date")
        return self


class CertificateCreate(CertificateBase):
    pass


class CertificateUpdate(BaseModel):
    title: str | None = Field(None, min_length=1, max_length=200)
    issuer: str | None = Field(None, min_length=1, max_length=200)
    issue_date: date | None = None
    expiry_date: date | None = None
    credential_id: str | None = Field(None, max_length=200)
    credential_url: str | None = Field(None, max_length=2000)
    description: str | None = Field(None, max_length=5000)
    image: ImageRef | None = None
    files: list[FileRef] | None = None
    skills: list[str] | None = None
    category: CertificateCategory | None = None
    visible: bool | None = None
    linked_project_ids: list[UUID] | None = None
    completed_at_institution: str | None = Field(None, max_length=200)

    @field_validator("skills", mode="before")
    @classmethod
    def flatten_skills(cls, v):
        return parse_skills(v) if v is not None else v


class CertificateResponse(CertificateBase):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    created_at: datetime
    updated_at: datetime
