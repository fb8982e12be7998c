"""
Knowledge Base API - Project Endpoints

Portfolio projects. `featured=true` narrows the listing to highlighted
projects; combined with `domainId` it narrows to featured projects of that
domain.
"""
from datetime import datetime
from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from pydantic import Field
import logging

from app.api.dependencies import get_storage
from app.api.errors import check_domain_reference
from app.api.schemas import ApiModel, ApiRequest
from app.core.interfaces import IStorage
from app.domain.entities import ProjectData
from app.domain.value_objects import ProjectPatch

logger = logging.getLogger(__name__)

router = APIRouter()

ProjectStatus = Literal['draft', 'in-progress', 'completed']


# ============================================
# Pydantic Models
# ============================================

class CreateProjectRequest(ApiRequest):
    """Request to create a new portfolio project"""
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    content: Optional[str] = Field(None, description="Long-form write-up")
    domain_id: str = Field(..., min_length=1, description="Owning domain")
    github_url: Optional[str] = Field(None, description="Source repository URL")
    demo_url: Optional[str] = Field(None, description="Live demo URL")
    status: ProjectStatus = 'draft'
    tags: List[str] = Field(default_factory=list)
    technologies: List[str] = Field(default_factory=list)
    featured: bool = False


class UpdateProjectRequest(ApiRequest):
    """Partial project update"""
    title: str = Field(None, min_length=1)
    description: str = Field(None, min_length=1)
    content: Optional[str] = None
    domain_id: str = Field(None, min_length=1)
    github_url: Optional[str] = None
    demo_url: Optional[str] = None
    status: ProjectStatus = None
    tags: List[str] = None
    technologies: List[str] = None
    featured: bool = None


class ProjectResponse(ApiModel):
    id: str
    title: str
    description: str
    content: Optional[str]
    domain_id: str
    github_url: Optional[str]
    demo_url: Optional[str]
    status: str
    tags: List[str]
    technologies: List[str]
    featured: bool
    created_at: datetime
    updated_at: datetime


# ============================================
# Endpoints
# ============================================

@router.get("/projects", response_model=List[ProjectResponse])
async def list_projects(
    domain_id: Optional[str] = Query(None, alias="domainId"),
    featured: bool = Query(False, description="Only featured projects"),
    storage: IStorage = Depends(get_storage)
):
    if featured:
        projects = await storage.get_featured_projects()
        if domain_id:
            projects = [p for p in projects if p.domain_id == domain_id]
        return projects
    return await storage.get_projects(domain_id)


@router.get("/projects/{project_id}", response_model=ProjectResponse)
async def get_project(project_id: str, storage: IStorage = Depends(get_storage)):
    project = await storage.get_project(project_id)
    if not project:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")
    return project


@router.post("/projects", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
async def create_project(request: CreateProjectRequest, storage: IStorage = Depends(get_storage)):
    await check_domain_reference(storage, request.domain_id, "project")

    logger.info(f"Creating project '{request.title}' in domain {request.domain_id}")
    return await storage.create_project(ProjectData(**request.model_dump()))


@router.patch("/projects/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: str,
    request: UpdateProjectRequest,
    storage: IStorage = Depends(get_storage)
):
    changes = request.model_dump(exclude_unset=True)
    if not await storage.get_project(project_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")
    await check_domain_reference(storage, changes.get("domain_id"), "project")

    project = await storage.update_project(project_id, ProjectPatch(**changes))
    if not project:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")
    return project


@router.delete("/projects/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(project_id: str, storage: IStorage = Depends(get_storage)):
    if not await storage.delete_project(project_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
