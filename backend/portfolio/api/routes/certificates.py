"""Certificate Routes — public listing plus editor CRUD and visibility toggle.

Invariants:
    - Anonymous callers only ever see visible certificates (hidden ones are 404)
    - Skills arrive flattened (schemas/certificate.py), so stored skills are plain strings
    - Deleting a certificate releases its image and files best-effort
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.api.dependencies import (
    ListParams, get_optional_user, list_params, require_editor,
)
from portfolio.core.domain_types import CertificateCategory
from portfolio.core.errors import ResourceNotFoundError, ValidationFailedError
from portfolio.infrastructure.database import get_db
from portfolio.infrastructure.media_service import (
    CloudinaryClient, get_optional_media_service, release_assets, resource_type_for,
)
from portfolio.models.certificate import Certificate
from portfolio.models.user import User
from portfolio.presentation.adapters import certificate_view
from portfolio.schemas.certificate import (
    CertificateCreate, CertificateResponse, CertificateUpdate,
)
from portfolio.schemas.common import VisibilityUpdate
from portfolio.services.queries import (
    apply_replace, apply_sort, apply_update, column_values, get_or_404, paginate,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/certificates", tags=["certificates"])

SORTABLE = (
    "title", "issuer", "issue_date", "expiry_date", "category",
    "created_at", "updated_at",
)


def serialize(certificate: Certificate) -> dict:
    data = CertificateResponse.model_validate(certificate).model_dump(mode="json")
    data["view"] = certificate_view(certificate)
    return data


async def _get_certificate(
    db: AsyncSession, certificate_id: UUID, user: User | None = None,
    include_hidden: bool = False,
) -> Certificate:
    certificate = await get_or_404(db, Certificate, certificate_id)
    if not certificate.visible and not (include_hidden or user):
        raise ResourceNotFoundError("Certificate", str(certificate_id))
    return certificate


@router.get("")
async def list_certificates(
    params: ListParams = Depends(list_params),
    category: CertificateCategory | None = Query(None),
    search: str | None = Query(None, max_length=100),
    include_hidden: bool = Query(False),
    user: User | None = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    query = select(Certificate)
    if not (include_hidden and user):
        query = query.where(Certificate.visible.is_(True))
    if category:
        query = query.where(Certificate.category == category.value)
    if search:
        pattern = f"%{search.strip()}%"
        query = query.where(or_(
            Certificate.title.ilike(pattern), Certificate.issuer.ilike(pattern),
        ))
    query = apply_sort(
        query, Certificate, params.sort, params.order, SORTABLE,
        default=(Certificate.issue_date.desc(), Certificate.created_at.desc()),
    )
    certificates, meta = await paginate(db, query, params.page, params.limit)
    return {
        "certificates": [serialize(c) for c in certificates],
        "pagination": meta.model_dump(),
    }


@router.get("/{certificate_id}")
async def get_certificate(
    certificate_id: UUID,
    user: User | None = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    return serialize(await _get_certificate(db, certificate_id, user))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_certificate(
    body: CertificateCreate,
    user: User = Depends(require_editor),
    db: AsyncSession = Depends(get_db),
):
    certificate = Certificate(**column_values(body))
    db.add(certificate)
    await db.commit()
    await db.refresh(certificate)
    logger.info(
        "Certificate created",
        extra={"resource": "Certificate", "resource_id": str(certificate.id)},
    )
    return serialize(certificate)


@router.put("/{certificate_id}")
async def replace_certificate(
    certificate_id: UUID,
    body: CertificateCreate,
    user: User = Depends(require_editor),
    db: AsyncSession = Depends(get_db),
):
    certificate = await _get_certificate(db, certificate_id, include_hidden=True)
    apply_replace(certificate, body)
    await db.commit()
    await db.refresh(certificate)
    return serialize(certificate)


@router.patch("/{certificate_id}")
async def update_certificate(
    certificate_id: UUID,
    body: CertificateUpdate,
    user: User = Depends(require_editor),
    db: AsyncSession = Depends(get_db),
):
    certificate = await _get_certificate(db, certificate_id, include_hidden=True)
    apply_update(certificate, body)
    if certificate.expiry_date and certificate.expiry_date < certificate.issue_date:
        raise ValidationFailedError(
            "expiry_date cannot be before issue_date", "expiry_date",
        )
    await db.commit()
    await db.refresh(certificate)
    return serialize(certificate)


@router.patch("/{certificate_id}/visibility")
async def set_certificate_visibility(
    certificate_id: UUID,
    body: VisibilityUpdate,
    user: User = Depends(require_editor),
    db: AsyncSession = Depends(get_db),
):
    certificate = await _get_certificate(db, certificate_id, include_hidden=True)
    certificate.visible = body.visible
    await db.commit()
    return {"id": str(certificate.id), "visible": certificate.visible}


@router.delete("/{certificate_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_certificate(
    certificate_id: UUID,
    user: User = Depends(require_editor),
    db: AsyncSession = Depends(get_db),
    media: CloudinaryClient | None = Depends(get_optional_media_service),
):
    certificate = await _get_certificate(db, certificate_id, include_hidden=True)
    assets = [
        (f["public_id"], resource_type_for(f.get("mime_type")))
        for f in certificate.files if f.get("public_id")
    ]
    if certificate.image and certificate.image.get("public_id"):
        assets.append((certificate.image["public_id"], "image"))
    await db.delete(certificate)
    await db.commit()
    logger.info(
        "Certificate deleted",
        extra={"resource": "Certificate", "resource_id": str(certificate_id)},
    )
    await release_assets(media, assets)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
