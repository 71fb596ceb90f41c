"""Contact Schemas — public contact form payload.

Invariants:
    - Strings are stripped before length limits apply
    - A blank subject is stored as None
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class ContactCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=2, max_length=100)
    email: EmailStr
    subject: str | None = Field(None, max_length=200)
    message: str = Field(min_length=10, max_length=2000)

    @field_validator("subject")
    @classmethod
    def blank_subject_to_none(cls, v: str | None) -> str | None:
        return v or None


class ContactResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    email: str
    subject: str | None
    message: str
    is_read: bool
    created_at: datetime
