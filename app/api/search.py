"""
Knowledge Base API - Search and Stats Endpoints
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
import logging

from app.api.articles import ArticleResponse
from app.api.dependencies import get_storage
from app.api.schemas import ApiModel
from app.core.interfaces import IStorage

logger = logging.getLogger(__name__)

router = APIRouter()


class SearchResponse(ApiModel):
    articles: List[ArticleResponse]


class StatsResponse(ApiModel):
    total_articles: int
    total_projects: int
    total_domains: int
    hours_learned: int


@router.get("/search", response_model=SearchResponse)
async def search(
    q: Optional[str] = Query(None, description="Case-insensitive text to find in title, body or tags"),
    storage: IStorage = Depends(get_storage)
):
    """Search article title, content and tags. Results are not ranked."""
    if not q:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Search query is required")

    articles = await storage.search_articles(q)
    logger.info(f"Search '{q}' returned {len(articles)} article(s)")
    return {"articles": articles}


@router.get("/stats", response_model=StatsResponse)
async def get_stats(storage: IStorage = Depends(get_storage)):
    return await storage.get_stats()
