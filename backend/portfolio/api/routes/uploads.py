"""Upload Routes — multipart uploads to and deletions from the media host.

Invariants:
    - Content type is checked against an allow-list before any bytes are sent
    - Size limits are enforced while reading; nothing over the limit is uploaded
    - Image uploads return responsive variants and schedule a variant warmup
"""

import logging

from fastapi import (
    APIRouter, BackgroundTasks, Depends, File, Query, UploadFile, status,
)

from portfolio.api.dependencies import require_editor
from portfolio.config import Settings, get_settings
from portfolio.core.errors import PayloadTooLargeError, ValidationFailedError
from portfolio.infrastructure.media_service import (
    CloudinaryClient, UploadedAsset, get_media_service,
)
from portfolio.models.user import User
from portfolio.presentation.media_urls import image_variants
from portfolio.schemas.upload import UploadResponse
from portfolio.services.image_warmup import warm_image

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/uploads", tags=["uploads"])

IMAGE_TYPES = frozenset({
    "image/jpeg", "image/png", "image/gif", "image/webp", "image/avif",
    "image/svg+xml",
})
DOCUMENT_TYPES = frozenset({
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "application/vnd.ms-excel",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "application/vnd.ms-powerpoint",
    "application/vnd.openxmlformats-officedocument.presentationml.presentation",
    "text/plain",
    "text/csv",
    "text/markdown",
})
FILE_TYPES = IMAGE_TYPES | DOCUMENT_TYPES

VARIANT_WIDTH = 800


async def _read_limited(upload: UploadFile, limit: int) -> bytes:
    content = await upload.read(limit + 1)
    if len(content) > limit:
        raise PayloadTooLargeError(len(content), limit)
    if not content:
        raise ValidationFailedError("Uploaded file is empty", "file")
    return content


def _check_type(upload: UploadFile, allowed: frozenset[str]) -> str:
    mime_type = (upload.content_type or "").split(";")[0].strip().lower()
    if mime_type not in allowed:
        raise ValidationFailedError(
            f"File type '{mime_type or 'unknown'}' is not allowed", "file",
        )
    return mime_type


def _response(asset: UploadedAsset) -> UploadResponse:
    variants = None
    if asset.is_image:
        variants = image_variants(asset.url, width=VARIANT_WIDTH, alt=asset.original_name)
    return UploadResponse(
        url=asset.url,
        public_id=asset.public_id,
        resource_type=asset.resource_type,
        mime_type=asset.mime_type,
        size=asset.size,
        original_name=asset.original_name,
        width=asset.width,
        height=asset.height,
        variants=variants,
    )


@router.post(
    "/image", response_model=UploadResponse, status_code=status.HTTP_201_CREATED,
)
async def upload_image(
    background_tasks: BackgroundTasks,
    file: UploadFile = File(...),
    user: User = Depends(require_editor),
    settings: Settings = Depends(get_settings),
    media: CloudinaryClient = Depends(get_media_service),
):
    mime_type = _check_type(file, IMAGE_TYPES)
    content = await _read_limited(file, settings.max_image_bytes)
    asset = await media.upload(
        content, file.filename or "image", mime_type, subfolder="images",
    )
    if asset.is_image:
        background_tasks.add_task(warm_image, asset.url, VARIANT_WIDTH)
    return _response(asset)


@router.post(
    "/file", response_model=UploadResponse, status_code=status.HTTP_201_CREATED,
)
async def upload_file(
    background_tasks: BackgroundTasks,
    file: UploadFile = File(...),
    user: User = Depends(require_editor),
    settings: Settings = Depends(get_settings),
    media: CloudinaryClient = Depends(get_media_service),
):
    mime_type = _check_type(file, FILE_TYPES)
    limit = (
        settings.max_image_bytes if mime_type in IMAGE_TYPES else settings.max_file_bytes
    )
    content = await _read_limited(file, limit)
    asset = await media.upload(
        content, file.filename or "file", mime_type, subfolder="files",
    )
    if asset.is_image:
        background_tasks.add_task(warm_image, asset.url, VARIANT_WIDTH)
    return _response(asset)


@router.delete("/{public_id:path}")
async def delete_upload(
    public_id: str,
    resource_type: str = Query("image", pattern="^(image|raw|video)$"),
    user: User = Depends(require_editor),
    media: CloudinaryClient = Depends(get_media_service),
):
    deleted = await media.destroy(public_id, resource_type)
    return {"public_id": public_id, "deleted": deleted}
