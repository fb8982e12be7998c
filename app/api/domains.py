"""
Knowledge Base API - Domain Endpoints

Domains are the fixed topical categories seeded at startup. Creating,
updating and deleting them is supported; deleting one that still owns
articles or projects is rejected with 409.
"""
from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic import Field
import logging

from app.api.dependencies import get_storage
from app.api.schemas import ApiModel, ApiRequest
from app.core.interfaces import IStorage
from app.domain.entities import DomainData
from app.domain.value_objects import DomainPatch

logger = logging.getLogger(__name__)

router = APIRouter()


# ============================================
# Pydantic Models
# ============================================

class CreateDomainRequest(ApiRequest):
    """Request to create a new domain"""
    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    icon: str = Field(..., min_length=1, description="Icon reference, e.g. 'fas fa-microchip'")
    color: str = Field(..., min_length=1, description="Color tag, e.g. 'blue'")
    progress: int = Field(0, ge=0, le=100, description="Set by hand, not derived from content")
    articles_count: int = Field(0, ge=0)
    projects_count: int = Field(0, ge=0)


class UpdateDomainRequest(ApiRequest):
    """Partial domain update - omitted fields keep their value"""
    name: str = Field(None, min_length=1)
    description: str = Field(None, min_length=1)
    icon: str = Field(None, min_length=1)
    color: str = Field(None, min_length=1)
    progress: int = Field(None, ge=0, le=100)
    articles_count: int = Field(None, ge=0)
    projects_count: int = Field(None, ge=0)


class DomainResponse(ApiModel):
    id: str
    name: str
    description: str
    icon: str
    color: str
    progress: int
    articles_count: int
    projects_count: int
    created_at: datetime
    updated_at: datetime


# ============================================
# Endpoints
# ============================================

@router.get("/domains", response_model=List[DomainResponse])
async def list_domains(storage: IStorage = Depends(get_storage)):
    """List all domains in catalog order."""
    return await storage.get_domains()


@router.get("/domains/{domain_id}", response_model=DomainResponse)
async def get_domain(domain_id: str, storage: IStorage = Depends(get_storage)):
    domain = await storage.get_domain(domain_id)
    if not domain:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Domain not found")
    return domain


@router.post("/domains", response_model=DomainResponse, status_code=status.HTTP_201_CREATED)
async def create_domain(request: CreateDomainRequest, storage: IStorage = Depends(get_storage)):
    logger.info(f"Creating domain: {request.name}")
    return await storage.create_domain(DomainData(**request.model_dump()))


@router.patch("/domains/{domain_id}", response_model=DomainResponse)
async def update_domain(
    domain_id: str,
    request: UpdateDomainRequest,
    storage: IStorage = Depends(get_storage)
):
    domain = await storage.update_domain(domain_id, DomainPatch(**request.model_dump(exclude_unset=True)))
    if not domain:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Domain not found")
    return domain


@router.delete("/domains/{domain_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_domain(domain_id: str, storage: IStorage = Depends(get_storage)):
    """
    Delete a domain.

    Raises:
        HTTPException: 404 if the domain doesn't exist
        DomainInUseError: mapped to 409 when articles/projects still reference it
    """
    if not await storage.delete_domain(domain_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Domain not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
