"""
Value Objects - patches, stats and small helpers shared by every backend.

Patches describe a partial update. Every field defaults to UNSET; only fields
that were explicitly set are merged into the stored record. This keeps an
omitted field distinct from a field explicitly set to None (e.g. clearing an
Article's excerpt).
"""

import uuid
from dataclasses import dataclass, fields
from typing import Any, Dict, Iterable, Optional

from .entities import ARTICLE_STATUSES, PROJECT_STATUSES, check_progress, check_status


class _Unset:
    """Sentinel type for patch fields that were not supplied"""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()

_SEQUENCE_FIELDS = {'tags', 'attachments', 'technologies'}


def new_entity_id() -> str:
    """Random 128-bit identifier rendered as a string (uuid4)."""
    return str(uuid.uuid4())


def matches_query(query: str, *texts: Optional[str], tags: Iterable[str] = ()) -> bool:
    """
    Case-insensitive substring match over free text and tags.

    An empty query matches nothing.
    """
    if not query:
        return False
    needle = query.lower()
    if any(text and needle in text.lower() for text in texts):
        return True
    return any(needle in tag.lower() for tag in tags)


@dataclass(frozen=True)
class _Patch:
    """Base patch: collects the explicitly set fields"""

    def changes(self) -> Dict[str, Any]:
        """Fields that were set, with sequences converted to tuples."""
        result = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is UNSET:
                continue
            if f.name in _SEQUENCE_FIELDS:
                value = tuple(value)
            result[f.name] = value
        return result

    @property
    def is_empty(self) -> bool:
        return not self.changes()


@dataclass(frozen=True)
class DomainPatch(_Patch):
    name: str = UNSET
    description: str = UNSET
    icon: str = UNSET
    color: str = UNSET
    progress: int = UNSET
    articles_count: int = UNSET
    projects_count: int = UNSET

    def __post_init__(self):
        if self.progress is not UNSET:
            check_progress(self.progress)


@dataclass(frozen=True)
class ArticlePatch(_Patch):
    title: str = UNSET
    content: str = UNSET
    excerpt: Optional[str] = UNSET
    domain_id: str = UNSET
    status: str = UNSET
    tags: Iterable[str] = UNSET
    attachments: Iterable[str] = UNSET

    def __post_init__(self):
        if self.status is not UNSET:
            check_status(self.status, ARTICLE_STATUSES)


@dataclass(frozen=True)
class ProjectPatch(_Patch):
    title: str = UNSET
    description: str = UNSET
    content: Optional[str] = UNSET
    domain_id: str = UNSET
    github_url: Optional[str] = UNSET
    demo_url: Optional[str] = UNSET
    status: str = UNSET
    tags: Iterable[str] = UNSET
    technologies: Iterable[str] = UNSET
    featured: bool = UNSET

    def __post_init__(self):
        if self.status is not UNSET:
            check_status(self.status, PROJECT_STATUSES)


@dataclass(frozen=True)
class Stats:
    """Summary counts computed on demand"""

    total_articles: int
    total_projects: int
    total_domains: int
    hours_learned: int
