"""
Project showcase endpoints
"""

import math
from typing import Optional

from fastapi import APIRouter, Depends, Query
import logging

from portfolio_cms.api.deps import get_project_store, require_admin
from portfolio_cms.core.exceptions import RecordNotFound
from portfolio_cms.schemas.common import APIResponse, PaginatedResponse, Pagination
from portfolio_cms.schemas.project import Project, ProjectCreate, ProjectFilters, ProjectUpdate
from portfolio_cms.schemas.user import TokenClaims
from portfolio_cms.services.project_store import ProjectStore

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", response_model=PaginatedResponse[Project])
def list_projects(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    category: Optional[str] = None,
    featured: Optional[bool] = None,
    search: Optional[str] = None,
    store: ProjectStore = Depends(get_project_store),
):
    """List projects, newest update first"""
    filters = ProjectFilters(category=category or None, featured=featured, search=search or None)
    result = store.list(filters, page=page, limit=limit)

    return PaginatedResponse[Project](
        data=result.records,
        pagination=Pagination(
            page=page,
            limit=limit,
            total=result.total,
            pages=math.ceil(result.total / limit),
        ),
    )


@router.post("/", response_model=APIResponse[Project])
def create_project(
    project_data: ProjectCreate,
    store: ProjectStore = Depends(get_project_store),
    _admin: TokenClaims = Depends(require_admin),
):
    project = store.create(project_data)
    return APIResponse[Project](success=True, data=project, message="Project created successfully")


@router.get("/slug/{slug}", response_model=APIResponse[Project])
def get_project_by_slug(slug: str, store: ProjectStore = Depends(get_project_store)):
    project = store.get_by_slug(slug)
    if not project:
        raise RecordNotFound("Project", slug)
    return APIResponse[Project](success=True, data=project)


@router.get("/{project_id}", response_model=APIResponse[Project])
def get_project(project_id: str, store: ProjectStore = Depends(get_project_store)):
    project = store.get(project_id)
    if not project:
        raise RecordNotFound("Project", project_id)
    return APIResponse[Project](success=True, data=project)


@router.put("/{project_id}", response_model=APIResponse[Project])
def update_project(
    project_id: str,
    project_data: ProjectUpdate,
    store: ProjectStore = Depends(get_project_store),
    _admin: TokenClaims = Depends(require_admin),
):
    project = store.update(project_id, project_data.model_dump(exclude_unset=True))
    if not project:
        raise RecordNotFound("Project", project_id)
    return APIResponse[Project](success=True, data=project, message="Project updated successfully")


@router.delete("/{project_id}")
def delete_project(
    project_id: str,
    store: ProjectStore = Depends(get_project_store),
    _admin: TokenClaims = Depends(require_admin),
):
    if not store.delete(project_id):
        raise RecordNotFound("Project", project_id)
    return {"success": True, "message": "Project deleted successfully"}
