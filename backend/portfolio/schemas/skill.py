"""Skill Schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from portfolio.core.domain_types import SkillCategory, SkillGroup, SkillSource

HEX_COLOR = r"^#(?:[0-9a-fA-F]{3}){1,2}$"


class SkillBase(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    category: SkillCategory = SkillCategory.OTHER
    level: int | None = Field(None, ge=1, le=100)
    icon: str | None = Field(None, max_length=200)
    color: str = Field("#3B82F6", pattern=HEX_COLOR)
    group: SkillGroup = SkillGroup.TECHNICAL
    visible: bool = True
    source: SkillSource = SkillSource.MANUAL

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v


class SkillCreate(SkillBase):
    pass


class SkillUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    category: SkillCategory | None = None
    level: int | None = Field(None, ge=1, le=100)
    icon: str | None = Field(None, max_length=200)
    color: str | None = Field(None, pattern=HEX_COLOR)
    group: SkillGroup | None = None
    visible: bool | None = None
    source: SkillSource | None = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v


class SkillResponse(SkillBase):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    created_at: datetime
    updated_at: datetime
