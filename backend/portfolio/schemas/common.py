"""Shared Schemas — embedded sub-documents and pagination envelopes.

Invariants:
    - Every embedded sub-document carries a string "id" (generated when absent)
    - Page.pages is ceil(total / limit), 0 when total is 0
"""

import math
import uuid

from pydantic import BaseModel, Field


def new_id() -> str:
    return uuid.uuid4().hex


class ImageRef(BaseModel):
    """An image stored on the media host."""
    id: str = Field(default_factory=new_id)
    url: str = Field(min_length=1, max_length=2000)
    alt: str | None = Field(None, max_length=300)
    public_id: str | None = Field(None, max_length=300)
    is_primary: bool = False


class FileRef(BaseModel):
    """A document (PDF, image, office file) stored on the media host."""
    id: str = Field(default_factory=new_id)
    url: str = Field(min_length=1, max_length=2000)
    public_id: str | None = Field(None, max_length=300)
    original_name: str = Field(min_length=1, max_length=300)
    mime_type: str = Field(min_length=1, max_length=150)
    size: int | None = Field(None, ge=0)
    is_primary: bool = False
    thumbnail_url: str | None = Field(None, max_length=2000)
    description: str | None = Field(None, max_length=1000)
    visible: bool = True


class PageMeta(BaseModel):
    page: int
    limit: int
    total: int
    pages: int

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "PageMeta":
        return cls(
            page=page, limit=limit, total=total,
            pages=math.ceil(total / limit) if total else 0,
        )


class VisibilityUpdate(BaseModel):
    visible: bool


class FeaturedUpdate(BaseModel):
    featured: bool
