"""
Core interfaces for the knowledge base.

IStorage is the single seam between the HTTP layer and whichever backend
holds Domains, Articles and Projects. Every backend must honour the same
contract:

- absence is a return value (None / False), never an exception
- reads return immutable snapshots
- create sets created_at == updated_at and assigns a fresh uuid4 id
- update merges only the fields set on the patch and refreshes updated_at
- nothing but initialize() may be called before initialize()
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from app.domain.entities import (
    Article,
    ArticleData,
    Domain,
    DomainData,
    Project,
    ProjectData,
)
from app.domain.value_objects import ArticlePatch, DomainPatch, ProjectPatch, Stats


class IStorage(ABC):
    """Interface for Domain/Article/Project storage and queries"""

    # Lifecycle

    @abstractmethod
    async def initialize(self) -> None:
        """
        Move storage from uninitialized to ready and seed the domain catalog.

        Raises:
            StorageNotReadyError: If called a second time
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release backend resources"""
        pass

    # Domains

    @abstractmethod
    async def get_domains(self) -> List[Domain]:
        pass

    @abstractmethod
    async def get_domain(self, domain_id: str) -> Optional[Domain]:
        pass

    @abstractmethod
    async def create_domain(self, data: DomainData) -> Domain:
        pass

    @abstractmethod
    async def update_domain(self, domain_id: str, patch: DomainPatch) -> Optional[Domain]:
        pass

    @abstractmethod
    async def delete_domain(self, domain_id: str) -> bool:
        """
        Delete a domain.

        Returns:
            True if removed, False if no such domain

        Raises:
            DomainInUseError: If articles or projects still reference it
        """
        pass

    # Articles

    @abstractmethod
    async def get_articles(self, domain_id: Optional[str] = None) -> List[Article]:
        """All articles in insertion order, optionally only those of one domain"""
        pass

    @abstractmethod
    async def get_article(self, article_id: str) -> Optional[Article]:
        pass

    @abstractmethod
    async def create_article(self, data: ArticleData) -> Article:
        pass

    @abstractmethod
    async def update_article(self, article_id: str, patch: ArticlePatch) -> Optional[Article]:
        pass

    @abstractmethod
    async def delete_article(self, article_id: str) -> bool:
        pass

    @abstractmethod
    async def search_articles(self, query: str) -> List[Article]:
        """
        Articles whose title, content or any tag contains query (case-insensitive).

        Results keep store order. An empty query matches nothing.
        """
        pass

    # Projects

    @abstractmethod
    async def get_projects(self, domain_id: Optional[str] = None) -> List[Project]:
        pass

    @abstractmethod
    async def get_project(self, project_id: str) -> Optional[Project]:
        pass

    @abstractmethod
    async def create_project(self, data: ProjectData) -> Project:
        pass

    @abstractmethod
    async def update_project(self, project_id: str, patch: ProjectPatch) -> Optional[Project]:
        pass

    @abstractmethod
    async def delete_project(self, project_id: str) -> bool:
        pass

    @abstractmethod
    async def get_featured_projects(self) -> List[Project]:
        pass

    # Stats

    @abstractmethod
    async def get_stats(self) -> Stats:
        pass
