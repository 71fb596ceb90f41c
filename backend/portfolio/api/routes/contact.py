"""Contact Routes — public contact form plus the admin inbox.

Invariants:
    - Submissions are stored, never emailed
    - POST is refused (503) while settings.enable_contact_form is off
    - Inbox operations require an editor or admin
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.api.dependencies import ListParams, list_params, require_editor
from portfolio.core.errors import FeatureDisabledError
from portfolio.infrastructure.database import get_db
from portfolio.models.contact_message import ContactMessage
from portfolio.models.user import User
from portfolio.schemas.contact import ContactCreate, ContactResponse
from portfolio.services.queries import apply_sort, column_values, get_or_404, paginate
from portfolio.services.site_config import load_configuration

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/contact", tags=["contact"])

SORTABLE = ("created_at", "name", "email", "is_read")


def serialize(message: ContactMessage) -> dict:
    return ContactResponse.model_validate(message).model_dump(mode="json")


@router.post("", status_code=status.HTTP_201_CREATED)
async def submit_contact(
    body: ContactCreate,
    db: AsyncSession = Depends(get_db),
):
    configuration = await load_configuration(db)
    if not configuration.settings.enable_contact_form:
        raise FeatureDisabledError("contact_form")
    message = ContactMessage(**column_values(body))
    db.add(message)
    await db.commit()
    await db.refresh(message)
    logger.info(
        "Contact message received",
        extra={"resource": "ContactMessage", "resource_id": str(message.id)},
    )
    return {"id": str(message.id), "message": "Message received"}


@router.get("")
async def list_messages(
    params: ListParams = Depends(list_params),
    unread: bool | None = Query(None),
    user: User = Depends(require_editor),
    db: AsyncSession = Depends(get_db),
):
    query = select(ContactMessage)
    if unread is not None:
        query = query.where(ContactMessage.is_read.is_(not unread))
    query = apply_sort(
        query, ContactMessage, params.sort, params.order, SORTABLE,
        default=(ContactMessage.created_at.desc(),),
    )
    messages, meta = await paginate(db, query, params.page, params.limit)
    return {
        "messages": [serialize(m) for m in messages],
        "pagination": meta.model_dump(),
    }


@router.get("/{message_id}")
async def get_message(
    message_id: UUID,
    user: User = Depends(require_editor),
    db: AsyncSession = Depends(get_db),
):
    return serialize(await get_or_404(db, ContactMessage, message_id))


@router.patch("/{message_id}/read")
async def mark_message_read(
    message_id: UUID,
    user: User = Depends(require_editor),
    db: AsyncSession = Depends(get_db),
):
    message = await get_or_404(db, ContactMessage, message_id)
    message.is_read = True
    await db.commit()
    await db.refresh(message)
    return serialize(message)


@router.delete("/{message_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_message(
    message_id: UUID,
    user: User = Depends(require_editor),
    db: AsyncSession = Depends(get_db),
):
    message = await get_or_404(db, ContactMessage, message_id)
    await db.delete(message)
    await db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
