"""Skill Routes — flat and grouped listings, CRUD, visibility toggle.

Invariants:
    - Skill names are unique case-insensitively (409 on duplicates)
    - Anonymous callers only see visible skills
    - /grouped lists categories in SkillCategory order and omits empty ones
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.api.dependencies import get_optional_user, require_editor
from portfolio.core.domain_types import SkillCategory
from portfolio.core.errors import ConflictError, ResourceNotFoundError
from portfolio.infrastructure.database import get_db
from portfolio.models.skill import Skill
from portfolio.models.user import User
from portfolio.schemas.common import VisibilityUpdate
from portfolio.schemas.skill import SkillCreate, SkillResponse, SkillUpdate
from portfolio.services.queries import (
    apply_replace, apply_update, column_values, get_or_404,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/skills", tags=["skills"])


def serialize(skill: Skill) -> dict:
    return SkillResponse.model_validate(skill).model_dump(mode="json")


async def _ensure_unique_name(
    db: AsyncSession, name: str, exclude_id: UUID | None = None,
) -> None:
    query = select(Skill.id).where(func.lower(Skill.name) == name.lower())
    if exclude_id is not None:
        query = query.where(Skill.id != exclude_id)
    if (await db.execute(query)).first() is not None:
        raise ConflictError(f"Skill '{name}' already exists")


async def _visible_skills(
    db: AsyncSession,
    user: User | None,
    include_hidden: bool,
    category: SkillCategory | None = None,
) -> list[Skill]:
    query = select(Skill)
    if not (include_hidden and user):
        query = query.where(Skill.visible.is_(True))
    if category:
        query = query.where(Skill.category == category.value)
    query = query.order_by(Skill.category.asc(), Skill.name.asc())
    return list((await db.execute(query)).scalars().all())


@router.get("")
async def list_skills(
    category: SkillCategory | None = Query(None),
    include_hidden: bool = Query(False),
    user: User | None = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    skills = await _visible_skills(db, user, include_hidden, category)
    return {"skills": [serialize(s) for s in skills], "total": len(skills)}


@router.get("/grouped")
async def list_skills_grouped(
    include_hidden: bool = Query(False),
    user: User | None = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    skills = await _visible_skills(db, user, include_hidden)
    groups: dict[str, list[dict]] = {}
    for category in SkillCategory:
        members = [serialize(s) for s in skills if s.category == category.value]
        if members:
            groups[category.value] = members
    return {"groups": groups, "total": len(skills)}


@router.get("/{skill_id}")
async def get_skill(
    skill_id: UUID,
    user: User | None = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    skill = await get_or_404(db, Skill, skill_id)
    if not skill.visible and user is None:
        raise ResourceNotFoundError("Skill", str(skill_id))
    return serialize(skill)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_skill(
    body: SkillCreate,
    user: User = Depends(require_editor),
    db: AsyncSession = Depends(get_db),
):
    await _ensure_unique_name(db, body.name)
    skill = Skill(**column_values(body))
    db.add(skill)
    await db.commit()
    await db.refresh(skill)
    logger.info(
        f"Skill created: {skill.name}",
        extra={"resource": "Skill", "resource_id": str(skill.id)},
    )
    return serialize(skill)


@router.put("/{skill_id}")
async def replace_skill(
    skill_id: UUID,
    body: SkillCreate,
    user: User = Depends(require_editor),
    db: AsyncSession = Depends(get_db),
):
    skill = await get_or_404(db, Skill, skill_id)
    await _ensure_unique_name(db, body.name, exclude_id=skill.id)
    apply_replace(skill, body)
    await db.commit()
    await db.refresh(skill)
    return serialize(skill)


@router.patch("/{skill_id}")
async def update_skill(
    skill_id: UUID,
    body: SkillUpdate,
    user: User = Depends(require_editor),
    db: AsyncSession = Depends(get_db),
):
    skill = await get_or_404(db, Skill, skill_id)
    if body.name is not None:
        await _ensure_unique_name(db, body.name, exclude_id=skill.id)
    apply_update(skill, body)
    await db.commit()
    await db.refresh(skill)
    return serialize(skill)


@router.patch("/{skill_id}/visibility")
async def set_skill_visibility(
    skill_id: UUID,
    body: VisibilityUpdate,
    user: User = Depends(require_editor),
    db: AsyncSession = Depends(get_db),
):
    skill = await get_or_404(db, Skill, skill_id)
    skill.visible = body.visible
    await db.commit()
    return {"id": str(skill.id), "visible": skill.visible}


@router.delete("/{skill_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_skill(
    skill_id: UUID,
    user: User = Depends(require_editor),
    db: AsyncSession = Depends(get_db),
):
    skill = await get_or_404(db, Skill, skill_id)
    await db.delete(skill)
    await db.commit()
    logger.info(
        "Skill deleted", extra={"resource": "Skill", "resource_id": str(skill_id)},
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
