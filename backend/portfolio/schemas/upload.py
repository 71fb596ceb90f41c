"""Upload Schemas — what the upload endpoints return."""

from pydantic import BaseModel


class UploadResponse(BaseModel):
    url: str
    public_id: str
    resource_type: str
    mime_type: str
    size: int
    original_name: str
    width: int | None = None
    height: int | None = None
    variants: dict | None = None
