"""
SQLAlchemy storage backend.

Same contract as MemStorage, backed by the domains / articles / projects
tables. Each operation runs in its own session that commits on success and
rolls back on error, so timestamps are written atomically with the row and
a caller always reads its own previous writes.

Listing order is insertion order (the integer surrogate key).
"""
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncIterator, List, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.interfaces import IStorage
from app.db.connection import create_engine, create_session_maker, create_tables
from app.db.models import ArticleModel, DomainModel, ProjectModel
from app.domain.entities import (
    Article,
    ArticleData,
    Domain,
    DomainData,
    DomainError,
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
from app.repositories.memory_storage import DEFAULT_HOURS_LEARNED, update_note
from app.repositories.seed import seed_domains

logger = logging.getLogger(__name__)

_DOMAIN_COLUMNS = ('id', 'name', 'description', 'icon', 'color', 'progress',
                   'articles_count', 'projects_count', 'created_at', 'updated_at')
_ARTICLE_COLUMNS = ('id', 'title', 'content', 'excerpt', 'domain_id', 'status',
                    'tags', 'attachments', 'created_at', 'updated_at')
_PROJECT_COLUMNS = ('id', 'title', 'description', 'content', 'domain_id', 'github_url',
                    'demo_url', 'status', 'tags', 'technologies', 'featured',
                    'created_at', 'updated_at')


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _to_columns(values: dict) -> dict:
    """Entity field values -> column values (tuples become JSON lists)."""
    return {k: list(v) if isinstance(v, tuple) else v for k, v in values.items()}


class SqlStorage(IStorage):
    """
    SQLAlchemy implementation of IStorage.

    Handles conversion between:
    - Domain entities (Domain, Article, Project) -> ORM models
    - ORM models -> frozen domain entities
    """

    def __init__(self, database_url: str, hours_learned: int = DEFAULT_HOURS_LEARNED):
        self._database_url = database_url
        self._hours_learned = hours_learned
        self._engine = None
        self._session_maker = None

    # ============================================
    # Lifecycle
    # ============================================

    async def initialize(self) -> None:
        if self._engine is not None:
            raise StorageNotReadyError("Storage already initialized")

        # Stays uninitialized unless tables and seed both succeed
        engine = create_engine(self._database_url)
        session_maker = create_session_maker(engine)
        try:
            await create_tables(engine)
            async with session_maker() as session:
                existing = await session.scalar(select(func.count()).select_from(DomainModel))
                if existing:
                    logger.info(f"Found {existing} existing domains, skipping seed")
                else:
                    for domain in seed_domains(_now()):
                        session.add(DomainModel(**_to_columns(field_values(domain))))
                    await session.commit()
                    logger.info("✅ Seeded default domain catalog")
        except Exception as e:
            logger.error(f"❌ Storage initialization failed: {e}")
            await engine.dispose()
            raise

        self._engine = engine
        self._session_maker = session_maker

    async def close(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
            logger.info("Database connection closed")

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[AsyncSession]:
        """Session that commits on success and rolls back on error."""
        if self._session_maker is None:
            raise StorageNotReadyError("Storage not initialized. Call initialize() first.")

        async with self._session_maker() as session:
            try:
                yield session
            except DomainError:
                # Expected conflicts are reported by the caller
                await session.rollback()
                raise
            except Exception as e:
                await session.rollback()
                logger.error(f"Database session error: {e}")
                raise
            else:
                await session.commit()

    # ============================================
    # Conversion
    # ============================================

    @staticmethod
    def _domain(row: DomainModel) -> Domain:
        values = {name: getattr(row, name) for name in _DOMAIN_COLUMNS}
        values['created_at'] = _as_utc(row.created_at)
        values['updated_at'] = _as_utc(row.updated_at)
        return Domain(**values)

    @staticmethod
    def _article(row: ArticleModel) -> Article:
        values = {name: getattr(row, name) for name in _ARTICLE_COLUMNS}
        values['created_at'] = _as_utc(row.created_at)
        values['updated_at'] = _as_utc(row.updated_at)
        return Article(**values)

    @staticmethod
    def _project(row: ProjectModel) -> Project:
        values = {name: getattr(row, name) for name in _PROJECT_COLUMNS}
        values['created_at'] = _as_utc(row.created_at)
        values['updated_at'] = _as_utc(row.updated_at)
        return Project(**values)

    @staticmethod
    async def _apply(session: AsyncSession, model, record_id: str, changes: dict):
        row = await session.scalar(select(model).where(model.id == record_id))
        if row is None:
            return None

        for name, value in _to_columns(changes).items():
            setattr(row, name, value)
        row.updated_at = _now()
        await session.flush()
        return row

    async def _delete(self, model, record_id: str) -> bool:
        async with self._session() as session:
            result = await session.execute(delete(model).where(model.id == record_id))
            return result.rowcount > 0

    # ============================================
    # Domains
    # ============================================

    async def get_domains(self) -> List[Domain]:
        async with self._session() as session:
            rows = await session.scalars(select(DomainModel).order_by(DomainModel.pk))
            return [self._domain(row) for row in rows]

    async def get_domain(self, domain_id: str) -> Optional[Domain]:
        async with self._session() as session:
            row = await session.scalar(select(DomainModel).where(DomainModel.id == domain_id))
            return self._domain(row) if row else None

    async def create_domain(self, data: DomainData) -> Domain:
        now = _now()
        domain = Domain(id=new_entity_id(), created_at=now, updated_at=now, **field_values(data))
        async with self._session() as session:
            session.add(DomainModel(**_to_columns(field_values(domain))))

        logger.info(f"💾 Created domain {domain.id} ({domain.name})")
        return domain

    async def update_domain(self, domain_id: str, patch: DomainPatch) -> Optional[Domain]:
        async with self._session() as session:
            row = await self._apply(session, DomainModel, domain_id, patch.changes())
            domain = self._domain(row) if row else None

        if domain:
            logger.info(f"Updated domain {domain_id}{update_note(patch)}")
        return domain

    async def delete_domain(self, domain_id: str) -> bool:
        async with self._session() as session:
            row = await session.scalar(select(DomainModel).where(DomainModel.id == domain_id))
            if row is None:
                return False

            articles = await session.scalar(
                select(func.count()).select_from(ArticleModel).where(ArticleModel.domain_id == domain_id)
            )
            projects = await session.scalar(
                select(func.count()).select_from(ProjectModel).where(ProjectModel.domain_id == domain_id)
            )
            if articles or projects:
                raise DomainInUseError(domain_id, articles, projects)

            await session.delete(row)

        logger.info(f"🗑️ Deleted domain {domain_id}")
        return True

    # ============================================
    # Articles
    # ============================================

    async def get_articles(self, domain_id: Optional[str] = None) -> List[Article]:
        stmt = select(ArticleModel).order_by(ArticleModel.pk)
        if domain_id:
            stmt = stmt.where(ArticleModel.domain_id == domain_id)
        async with self._session() as session:
            rows = await session.scalars(stmt)
            return [self._article(row) for row in rows]

    async def get_article(self, article_id: str) -> Optional[Article]:
        async with self._session() as session:
            row = await session.scalar(select(ArticleModel).where(ArticleModel.id == article_id))
            return self._article(row) if row else None

    async def create_article(self, data: ArticleData) -> Article:
        now = _now()
        article = Article(id=new_entity_id(), created_at=now, updated_at=now, **field_values(data))
        async with self._session() as session:
            session.add(ArticleModel(**_to_columns(field_values(article))))

        logger.info(f"💾 Created article {article.id} in domain {article.domain_id}")
        return article

    async def update_article(self, article_id: str, patch: ArticlePatch) -> Optional[Article]:
        async with self._session() as session:
            row = await self._apply(session, ArticleModel, article_id, patch.changes())
            article = self._article(row) if row else None

        if article:
            logger.info(f"Updated article {article_id}{update_note(patch)}")
        return article

    async def delete_article(self, article_id: str) -> bool:
        deleted = await self._delete(ArticleModel, article_id)
        if deleted:
            logger.info(f"🗑️ Deleted article {article_id}")
        return deleted

    async def search_articles(self, query: str) -> List[Article]:
        # Tags live in a JSON column, so matching happens after loading
        articles = await self.get_articles()
        return [a for a in articles if matches_query(query, a.title, a.content, tags=a.tags)]

    # ============================================
    # Projects
    # ============================================

    async def get_projects(self, domain_id: Optional[str] = None) -> List[Project]:
        stmt = select(ProjectModel).order_by(ProjectModel.pk)
        if domain_id:
            stmt = stmt.where(ProjectModel.domain_id == domain_id)
        async with self._session() as session:
            rows = await session.scalars(stmt)
            return [self._project(row) for row in rows]

    async def get_project(self, project_id: str) -> Optional[Project]:
        async with self._session() as session:
            row = await session.scalar(select(ProjectModel).where(ProjectModel.id == project_id))
            return self._project(row) if row else None

    async def create_project(self, data: ProjectData) -> Project:
        now = _now()
        project = Project(id=new_entity_id(), created_at=now, updated_at=now, **field_values(data))
        async with self._session() as session:
            session.add(ProjectModel(**_to_columns(field_values(project))))

        logger.info(f"💾 Created project {project.id} in domain {project.domain_id}")
        return project

    async def update_project(self, project_id: str, patch: ProjectPatch) -> Optional[Project]:
        async with self._session() as session:
            row = await self._apply(session, ProjectModel, project_id, patch.changes())
            project = self._project(row) if row else None

        if project:
            logger.info(f"Updated project {project_id}{update_note(patch)}")
        return project

    async def delete_project(self, project_id: str) -> bool:
        deleted = await self._delete(ProjectModel, project_id)
        if deleted:
            logger.info(f"🗑️ Deleted project {project_id}")
        return deleted

    async def get_featured_projects(self) -> List[Project]:
        stmt = select(ProjectModel).where(ProjectModel.featured.is_(True)).order_by(ProjectModel.pk)
        async with self._session() as session:
            rows = await session.scalars(stmt)
            return [self._project(row) for row in rows]

    # ============================================
    # Stats
    # ============================================

    async def get_stats(self) -> Stats:
        async with self._session() as session:
            articles = await session.scalar(select(func.count()).select_from(ArticleModel))
            projects = await session.scalar(select(func.count()).select_from(ProjectModel))
            domains = await session.scalar(select(func.count()).select_from(DomainModel))

        return Stats(
            total_articles=articles,
            total_projects=projects,
            total_domains=domains,
            hours_learned=self._hours_learned,
        )
