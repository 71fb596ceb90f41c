"""Query Helpers — get-or-404, pagination, sorting and partial-update application.

Invariants:
    - Sort fields are whitelisted per model; unknown fields are a 400, never raw SQL
    - Pagination is 1-based: page=1 is the first page
    - apply_update() only touches fields the client actually sent
"""

from datetime import date, datetime
from typing import Any, Sequence, TypeVar
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.core.domain_types import SortOrder
from portfolio.core.errors import ResourceNotFoundError, ValidationFailedError
from portfolio.db.base import Base
from portfolio.schemas.common import PageMeta

ModelT = TypeVar("ModelT", bound=Base)


async def get_or_404(
    db: AsyncSession, model: type[ModelT], doc_id: UUID, resource: str | None = None,
) -> ModelT:
    result = await db.execute(select(model).where(model.id == doc_id))
    doc = result.scalar_one_or_none()
    if doc is None:
        raise ResourceNotFoundError(resource or model.__name__, str(doc_id))
    return doc


def apply_sort(
    query: Select,
    model: type[Base],
    sort: str | None,
    order: SortOrder,
    allowed: Sequence[str],
    default: Sequence[Any],
) -> Select:
    if not sort:
        return query.order_by(*default)
    if sort not in allowed:
        raise ValidationFailedError(
            f"Cannot sort by '{sort}'. Allowed: {', '.join(allowed)}", "sort",
        )
    column = getattr(model, sort)
    return query.order_by(column.asc() if order == SortOrder.ASC else column.desc())


async def paginate(
    db: AsyncSession, query: Select, page: int, limit: int,
) -> tuple[list, PageMeta]:
    count_query = select(func.count()).select_from(
        query.order_by(None).subquery(),
    )
    total = (await db.execute(count_query)).scalar_one()
    result = await db.execute(query.limit(limit).offset((page - 1) * limit))
    return list(result.scalars().all()), PageMeta.build(page, limit, total)


def column_values(payload: BaseModel, **dump_kwargs) -> dict:
    """Schema -> column values: JSON-safe sub-documents, native date columns."""
    native = payload.model_dump(**dump_kwargs)
    as_json = payload.model_dump(mode="json", **dump_kwargs)
    return {
        key: native[key] if isinstance(native[key], (date, datetime)) else value
        for key, value in as_json.items()
    }


def apply_update(doc: Base, payload: BaseModel) -> list[str]:
    """Assign every explicitly-sent field. Returns the changed field names."""
    sent = column_values(payload, exclude_unset=True)
    columns = doc.__table__.columns
    for key, value in sent.items():
        if value is None and not columns[key].nullable:
            raise ValidationFailedError(f"{key} cannot be null", key)
        setattr(doc, key, value)
    return sorted(sent)


def apply_replace(doc: Base, payload: BaseModel) -> None:
    for key, value in column_values(payload).items():
        setattr(doc, key, value)
