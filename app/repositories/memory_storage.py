"""
In-memory storage backend.

Three insertion-ordered dicts keyed by id. Records are frozen dataclasses,
so handing one to a caller never exposes stored state: update builds a new
record with dataclasses.replace and swaps it into the dict.

No method awaits anything, so every operation runs to completion before
the event loop can schedule another request.
"""
import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Dict, List, Optional, TypeVar

from app.core.interfaces import IStorage
from app.domain.entities import (
    Article,
    ArticleData,
    Domain,
    DomainData,
    DomainInUseError,
    Project,
    ProjectData,
    StorageNotReadyError,
    field_values,
)
from app.domain.value_objects import (
    ArticlePatch,
    DomainPatch,
    ProjectPatch,
    Stats,
    matches_query,
    new_entity_id,
)
from app.repositories.seed import seed_domains

logger = logging.getLogger(__name__)

DEFAULT_HOURS_LEARNED = 1240

T = TypeVar("T", Domain, Article, Project)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def update_note(patch) -> str:
    """Suffix for the update log line of a patch that changes no field."""
    return " (timestamp only)" if patch.is_empty else ""


class MemStorage(IStorage):
    """
    Dict-backed implementation of IStorage.

    State machine: uninitialized -> ready (via initialize()).
    Domain-scoped listing is a linear scan over all records of the kind.
    """

    def __init__(self, hours_learned: int = DEFAULT_HOURS_LEARNED):
        self._hours_learned = hours_learned
        self._ready = False
        self._domains: Dict[str, Domain] = {}
        self._articles: Dict[str, Article] = {}
        self._projects: Dict[str, Project] = {}

    # ============================================
    # Lifecycle
    # ============================================

    async def initialize(self) -> None:
        if self._ready:
            raise StorageNotReadyError("Storage already initialized")

        for domain in seed_domains(_now()):
            self._domains[domain.id] = domain
        self._ready = True

        logger.info(f"✅ In-memory storage ready with {len(self._domains)} seeded domains")

    async def close(self) -> None:
        logger.debug("In-memory storage closed")

    def _require_ready(self) -> None:
        if not self._ready:
            raise StorageNotReadyError("Storage not initialized. Call initialize() first.")

    # ============================================
    # Generic record helpers
    # ============================================

    @staticmethod
    def _update(records: Dict[str, T], record_id: str, changes: dict) -> Optional[T]:
        existing = records.get(record_id)
        if existing is None:
            return None

        updated = replace(existing, **changes, updated_at=_now())
        records[record_id] = updated
        return updated

    # ============================================
    # Domains
    # ============================================

    async def get_domains(self) -> List[Domain]:
        self._require_ready()
        return list(self._domains.values())

    async def get_domain(self, domain_id: str) -> Optional[Domain]:
        self._require_ready()
        return self._domains.get(domain_id)

    async def create_domain(self, data: DomainData) -> Domain:
        self._require_ready()
        now = _now()
        domain = Domain(id=new_entity_id(), created_at=now, updated_at=now, **field_values(data))
        self._domains[domain.id] = domain

        logger.info(f"💾 Created domain {domain.id} ({domain.name})")
        return domain

    async def update_domain(self, domain_id: str, patch: DomainPatch) -> Optional[Domain]:
        self._require_ready()
        domain = self._update(self._domains, domain_id, patch.changes())
        if domain:
            logger.info(f"Updated domain {domain_id}{update_note(patch)}")
        return domain

    async def delete_domain(self, domain_id: str) -> bool:
        self._require_ready()
        if domain_id not in self._domains:
            return False

        articles = sum(1 for a in self._articles.values() if a.domain_id == domain_id)
        projects = sum(1 for p in self._projects.values() if p.domain_id == domain_id)
        if articles or projects:
            raise DomainInUseError(domain_id, articles, projects)

        del self._domains[domain_id]
        logger.info(f"🗑️ Deleted domain {domain_id}")
        return True

    # ============================================
    # Articles
    # ============================================

    async def get_articles(self, domain_id: Optional[str] = None) -> List[Article]:
        self._require_ready()
        articles = list(self._articles.values())
        if domain_id:
            return [a for a in articles if a.domain_id == domain_id]
        return articles

    async def get_article(self, article_id: str) -> Optional[Article]:
        self._require_ready()
        return self._articles.get(article_id)

    async def create_article(self, data: ArticleData) -> Article:
        self._require_ready()
        now = _now()
        article = Article(id=new_entity_id(), created_at=now, updated_at=now, **field_values(data))
        self._articles[article.id] = article

        logger.info(f"💾 Created article {article.id} in domain {article.domain_id}")
        return article

    async def update_article(self, article_id: str, patch: ArticlePatch) -> Optional[Article]:
        self._require_ready()
        article = self._update(self._articles, article_id, patch.changes())
        if article:
            logger.info(f"Updated article {article_id}{update_note(patch)}")
        return article

    async def delete_article(self, article_id: str) -> bool:
        self._require_ready()
        if self._articles.pop(article_id, None) is None:
            return False
        logger.info(f"🗑️ Deleted article {article_id}")
        return True

    async def search_articles(self, query: str) -> List[Article]:
        self._require_ready()
        results = [
            a for a in self._articles.values()
            if matches_query(query, a.title, a.content, tags=a.tags)
        ]
        logger.debug(f"Search {query!r} matched {len(results)} article(s)")
        return results

    # ============================================
    # Projects
    # ============================================

    async def get_projects(self, domain_id: Optional[str] = None) -> List[Project]:
        self._require_ready()
        projects = list(self._projects.values())
        if domain_id:
            return [p for p in projects if p.domain_id == domain_id]
        return projects

    async def get_project(self, project_id: str) -> Optional[Project]:
        self._require_ready()
        return self._projects.get(project_id)

    async def create_project(self, data: ProjectData) -> Project:
        self._require_ready()
        now = _now()
        project = Project(id=new_entity_id(), created_at=now, updated_at=now, **field_values(data))
        self._projects[project.id] = project

        logger.info(f"💾 Created project {project.id} in domain {project.domain_id}")
        return project

    async def update_project(self, project_id: str, patch: ProjectPatch) -> Optional[Project]:
        self._require_ready()
        project = self._update(self._projects, project_id, patch.changes())
        if project:
            logger.info(f"Updated project {project_id}{update_note(patch)}")
        return project

    async def delete_project(self, project_id: str) -> bool:
        self._require_ready()
        if self._projects.pop(project_id, None) is None:
            return False
        logger.info(f"🗑️ Deleted project {project_id}")
        return True

    async def get_featured_projects(self) -> List[Project]:
        self._require_ready()
        return [p for p in self._projects.values() if p.featured]

    # ============================================
    # Stats
    # ============================================

    async def get_stats(self) -> Stats:
        self._require_ready()
        return Stats(
            total_articles=len(self._articles),
            total_projects=len(self._projects),
            total_domains=len(self._domains),
            hours_learned=self._hours_learned,
        )
