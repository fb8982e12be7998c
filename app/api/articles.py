"""
Knowledge Base API - Article Endpoints

CRUD for articles. The owning domain must exist when an article is created
(or moved to another domain); the store itself does not check this.
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
from app.domain.entities import ArticleData
from app.domain.value_objects import ArticlePatch

logger = logging.getLogger(__name__)

router = APIRouter()

ArticleStatus = Literal['draft', 'in-progress', 'published', 'completed']


# ============================================
# Pydantic Models
# ============================================

class CreateArticleRequest(ApiRequest):
    """Request to create a new article"""
    title: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1, description="Article body")
    excerpt: Optional[str] = Field(None, description="Short summary shown in listings")
    domain_id: str = Field(..., min_length=1, description="Owning domain")
    status: ArticleStatus = 'draft'
    tags: List[str] = Field(default_factory=list)
    attachments: List[str] = Field(default_factory=list, description="Attachment references")


class UpdateArticleRequest(ApiRequest):
    """Partial article update - only excerpt may be set to null"""
    title: str = Field(None, min_length=1)
    content: str = Field(None, min_length=1)
    excerpt: Optional[str] = None
    domain_id: str = Field(None, min_length=1)
    status: ArticleStatus = None
    tags: List[str] = None
    attachments: List[str] = None


class ArticleResponse(ApiModel):
    id: str
    title: str
    content: str
    excerpt: Optional[str]
    domain_id: str
    status: str
    tags: List[str]
    attachments: List[str]
    created_at: datetime
    updated_at: datetime


# ============================================
# Endpoints
# ============================================

@router.get("/articles", response_model=List[ArticleResponse])
async def list_articles(
    domain_id: Optional[str] = Query(None, alias="domainId"),
    storage: IStorage = Depends(get_storage)
):
    """List articles, optionally only those of one domain."""
    return await storage.get_articles(domain_id)


@router.get("/articles/{article_id}", response_model=ArticleResponse)
async def get_article(article_id: str, storage: IStorage = Depends(get_storage)):
    article = await storage.get_article(article_id)
    if not article:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Article not found")
    return article


@router.post("/articles", response_model=ArticleResponse, status_code=status.HTTP_201_CREATED)
async def create_article(request: CreateArticleRequest, storage: IStorage = Depends(get_storage)):
    await check_domain_reference(storage, request.domain_id, "article")

    logger.info(f"Creating article '{request.title}' in domain {request.domain_id}")
    return await storage.create_article(ArticleData(**request.model_dump()))


@router.patch("/articles/{article_id}", response_model=ArticleResponse)
async def update_article(
    article_id: str,
    request: UpdateArticleRequest,
    storage: IStorage = Depends(get_storage)
):
    changes = request.model_dump(exclude_unset=True)
    if not await storage.get_article(article_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Article not found")
    await check_domain_reference(storage, changes.get("domain_id"), "article")

    article = await storage.update_article(article_id, ArticlePatch(**changes))
    if not article:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Article not found")
    return article


@router.delete("/articles/{article_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_article(article_id: str, storage: IStorage = Depends(get_storage)):
    if not await storage.delete_article(article_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Article not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
