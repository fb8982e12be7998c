"""
Domain Entities - Domains, Articles and Projects.

Entities are immutable snapshots. The store replaces a record on every
update instead of mutating it, so a value handed to a caller can never be
used to change stored state behind the store's back.

Each kind comes in two shapes:
- *Data (DomainData, ArticleData, ProjectData): the fields a caller supplies
  on create (no id, no timestamps)
- the entity itself (Domain, Article, Project): data + id + timestamps

Sequence fields (tags, technologies, attachments) are tuples.
"""

from dataclasses import dataclass, field, fields
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

ARTICLE_STATUSES = ('draft', 'in-progress', 'published', 'completed')
PROJECT_STATUSES = ('draft', 'in-progress', 'completed')


def check_progress(progress: int) -> None:
    if not 0 <= progress <= 100:
        raise ValueError(f"Invalid progress: {progress}. Must be between 0 and 100.")


def check_status(status: str, allowed: Tuple[str, ...]) -> None:
    if status not in allowed:
        raise ValueError(f"Invalid status: {status}. Must be one of {allowed}")


def field_values(record: Any) -> Dict[str, Any]:
    """Shallow field-name -> value mapping of a dataclass instance."""
    return {f.name: getattr(record, f.name) for f in fields(record)}


# ============================================
# Create shapes
# ============================================

@dataclass(frozen=True)
class DomainData:
    """Fields supplied when creating a Domain"""

    name: str
    description: str
    icon: str
    color: str
    progress: int = 0
    articles_count: int = 0
    projects_count: int = 0

    def __post_init__(self):
        check_progress(self.progress)


@dataclass(frozen=True)
class ArticleData:
    """Fields supplied when creating an Article"""

    title: str
    content: str
    domain_id: str
    excerpt: Optional[str] = None
    status: str = 'draft'
    tags: Tuple[str, ...] = ()
    attachments: Tuple[str, ...] = ()

    def __post_init__(self):
        check_status(self.status, ARTICLE_STATUSES)
        object.__setattr__(self, 'tags', tuple(self.tags))
        object.__setattr__(self, 'attachments', tuple(self.attachments))


@dataclass(frozen=True)
class ProjectData:
    """Fields supplied when creating a Project"""

    title: str
    description: str
    domain_id: str
    content: Optional[str] = None
    github_url: Optional[str] = None
    demo_url: Optional[str] = None
    status: str = 'draft'
    tags: Tuple[str, ...] = ()
    technologies: Tuple[str, ...] = ()
    featured: bool = False

    def __post_init__(self):
        check_status(self.status, PROJECT_STATUSES)
        object.__setattr__(self, 'tags', tuple(self.tags))
        object.__setattr__(self, 'technologies', tuple(self.technologies))


# ============================================
# Entities
# ============================================

@dataclass(frozen=True)
class Domain:
    """
    Topical category grouping Articles and Projects.

    Invariants:
    1. id never changes once assigned
    2. progress is set independently, it is NOT a rollup of child records
    3. articles_count / projects_count are stored values, never reconciled
       with the actual number of children
    """

    id: str
    created_at: datetime
    updated_at: datetime
    name: str
    description: str
    icon: str
    color: str
    progress: int = 0
    articles_count: int = 0
    projects_count: int = 0

    def __post_init__(self):
        check_progress(self.progress)

    def __repr__(self) -> str:
        return f"Domain(id={self.id}, name={self.name!r}, progress={self.progress})"


@dataclass(frozen=True)
class Article:
    """
    Written content owned by exactly one Domain.

    domain_id must name an existing Domain at creation time. The HTTP layer
    checks that; the store does not.
    """

    id: str
    created_at: datetime
    updated_at: datetime
    title: str
    content: str
    domain_id: str
    excerpt: Optional[str] = None
    status: str = 'draft'
    tags: Tuple[str, ...] = field(default_factory=tuple)
    attachments: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        check_status(self.status, ARTICLE_STATUSES)
        object.__setattr__(self, 'tags', tuple(self.tags))
        object.__setattr__(self, 'attachments', tuple(self.attachments))

    def __repr__(self) -> str:
        return f"Article(id={self.id}, domain={self.domain_id}, status={self.status})"


@dataclass(frozen=True)
class Project:
    """Portfolio entry owned by exactly one Domain."""

    id: str
    created_at: datetime
    updated_at: datetime
    title: str
    description: str
    domain_id: str
    content: Optional[str] = None
    github_url: Optional[str] = None
    demo_url: Optional[str] = None
    status: str = 'draft'
    tags: Tuple[str, ...] = field(default_factory=tuple)
    technologies: Tuple[str, ...] = field(default_factory=tuple)
    featured: bool = False

    def __post_init__(self):
        check_status(self.status, PROJECT_STATUSES)
        object.__setattr__(self, 'tags', tuple(self.tags))
        object.__setattr__(self, 'technologies', tuple(self.technologies))

    def __repr__(self) -> str:
        featured = ", featured" if self.featured else ""
        return f"Project(id={self.id}, domain={self.domain_id}, status={self.status}{featured})"


# Domain exceptions

class DomainError(Exception):
    """Base exception for domain layer errors"""
    pass


class DomainInUseError(DomainError):
    """Raised when deleting a Domain that still owns Articles or Projects"""

    def __init__(self, domain_id: str, articles: int, projects: int):
        self.domain_id = domain_id
        self.articles = articles
        self.projects = projects
        super().__init__(
            f"Domain {domain_id} still has {articles} article(s) "
            f"and {projects} project(s)"
        )


class StorageNotReadyError(RuntimeError):
    """Raised when storage is used outside its ready state"""
    pass
