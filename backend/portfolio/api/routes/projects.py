"""Project Routes — public listing plus editor CRUD, toggles and reports.

Invariants:
    - Anonymous callers only ever see visible projects (hidden ones are 404)
    - Every returned project carries a "view" block from presentation.adapters
    - JSON sub-document columns are reassigned, never mutated in place
    - Deleting a project releases its media assets best-effort
"""

import logging
import mimetypes
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.api.dependencies import (
    ListParams, get_optional_user, list_params, require_editor,
)
from portfolio.core.domain_types import ProjectCategory
from portfolio.core.errors import ResourceNotFoundError
from portfolio.infrastructure.database import get_db
from portfolio.infrastructure.media_service import (
    CloudinaryClient, get_optional_media_service, release_assets, resource_type_for,
)
from portfolio.models.project import Project
from portfolio.models.user import User
from portfolio.presentation.adapters import project_view
from portfolio.schemas.common import FeaturedUpdate, VisibilityUpdate
from portfolio.schemas.project import (
    ProjectCreate, ProjectResponse, ProjectUpdate, Report,
)
from portfolio.services.queries import (
    apply_replace, apply_sort, apply_update, column_values, get_or_404, paginate,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/projects", tags=["projects"])

SORTABLE = ("title", "created_at", "updated_at", "order", "status", "category")


def serialize(project: Project) -> dict:
    data = ProjectResponse.model_validate(project).model_dump(mode="json")
    data["view"] = project_view(project)
    return data


async def _get_project(
    db: AsyncSession, project_id: UUID, user: User | None = None,
    include_hidden: bool = False,
) -> Project:
    project = await get_or_404(db, Project, project_id)
    if not project.visible and not (include_hidden or user):
        raise ResourceNotFoundError("Project", str(project_id))
    return project


@router.get("")
async def list_projects(
    params: ListParams = Depends(list_params),
    category: ProjectCategory | None = Query(None),
    featured: bool | None = Query(None),
    search: str | None = Query(None, max_length=100),
    include_hidden: bool = Query(False),
    user: User | None = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    """List projects. Hidden projects are included only for signed-in users who ask."""
    query = select(Project)
    if not (include_hidden and user):
        query = query.where(Project.visible.is_(True))
    if category:
        query = query.where(Project.category == category.value)
    if featured is not None:
        query = query.where(Project.featured.is_(featured))
    if search:
        pattern = f"%{search.strip()}%"
        query = query.where(or_(
            Project.title.ilike(pattern), Project.short_description.ilike(pattern),
        ))
    query = apply_sort(
        query, Project, params.sort, params.order, SORTABLE,
        default=(Project.order.asc(), Project.created_at.desc()),
    )
    projects, meta = await paginate(db, query, params.page, params.limit)
    return {
        "projects": [serialize(p) for p in projects],
        "pagination": meta.model_dump(),
    }


@router.get("/{project_id}")
async def get_project(
    project_id: UUID,
    user: User | None = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    return serialize(await _get_project(db, project_id, user))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_project(
    body: ProjectCreate,
    user: User = Depends(require_editor),
    db: AsyncSession = Depends(get_db),
):
    project = Project(**column_values(body))
    db.add(project)
    await db.commit()
    await db.refresh(project)
    logger.info(
        "Project created",
        extra={"resource": "Project", "resource_id": str(project.id), "user_id": str(user.id)},
    )
    return serialize(project)


@router.put("/{project_id}")
async def replace_project(
    project_id: UUID,
    body: ProjectCreate,
    user: User = Depends(require_editor),
    db: AsyncSession = Depends(get_db),
):
    project = await _get_project(db, project_id, include_hidden=True)
    apply_replace(project, body)
    await db.commit()
    await db.refresh(project)
    return serialize(project)


@router.patch("/{project_id}")
async def update_project(
    project_id: UUID,
    body: ProjectUpdate,
    user: User = Depends(require_editor),
    db: AsyncSession = Depends(get_db),
):
    project = await _get_project(db, project_id, include_hidden=True)
    changed = apply_update(project, body)
    await db.commit()
    await db.refresh(project)
    logger.info(
        f"Project updated: {', '.join(changed) or 'no fields'}",
        extra={"resource": "Project", "resource_id": str(project.id)},
    )
    return serialize(project)


@router.patch("/{project_id}/visibility")
async def set_project_visibility(
    project_id: UUID,
    body: VisibilityUpdate,
    user: User = Depends(require_editor),
    db: AsyncSession = Depends(get_db),
):
    project = await _get_project(db, project_id, include_hidden=True)
    project.visible = body.visible
    await db.commit()
    return {"id": str(project.id), "visible": project.visible}


@router.patch("/{project_id}/featured")
async def set_project_featured(
    project_id: UUID,
    body: FeaturedUpdate,
    user: User = Depends(require_editor),
    db: AsyncSession = Depends(get_db),
):
    project = await _get_project(db, project_id, include_hidden=True)
    project.featured = body.featured
    await db.commit()
    return {"id": str(project.id), "featured": project.featured}


@router.post("/{project_id}/reports", status_code=status.HTTP_201_CREATED)
async def add_project_report(
    project_id: UUID,
    body: Report,
    user: User = Depends(require_editor),
    db: AsyncSession = Depends(get_db),
):
    project = await _get_project(db, project_id, include_hidden=True)
    report = body.model_dump(mode="json")
    project.reports = [*project.reports, report]
    await db.commit()
    return report


@router.delete(
    "/{project_id}/reports/{report_id}", status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_project_report(
    project_id: UUID,
    report_id: str,
    user: User = Depends(require_editor),
    db: AsyncSession = Depends(get_db),
    media: CloudinaryClient | None = Depends(get_optional_media_service),
):
    project = await _get_project(db, project_id, include_hidden=True)
    report = next((r for r in project.reports if r.get("id") == report_id), None)
    if report is None:
        raise ResourceNotFoundError("Report", report_id)
    project.reports = [r for r in project.reports if r.get("id") != report_id]
    await db.commit()
    if report.get("public_id"):
        mime_type, _ = mimetypes.guess_type(report.get("file_url") or "")
        await release_assets(media, [(report["public_id"], resource_type_for(mime_type))])
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(
    project_id: UUID,
    user: User = Depends(require_editor),
    db: AsyncSession = Depends(get_db),
    media: CloudinaryClient | None = Depends(get_optional_media_service),
):
    project = await _get_project(db, project_id, include_hidden=True)
    assets = [
        (img["public_id"], "image")
        for img in project.images if img.get("public_id")
    ] + [
        (f["public_id"], resource_type_for(f.get("mime_type")))
        for f in project.project_files if f.get("public_id")
    ]
    await db.delete(project)
    await db.commit()
    logger.info(
        "Project deleted",
        extra={"resource": "Project", "resource_id": str(project_id), "user_id": str(user.id)},
    )
    await release_assets(media, assets)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
