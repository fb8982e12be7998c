"""
SQLAlchemy ORM models for database tables.

One table per entity kind: domains, articles, projects.
Each table has an integer surrogate key `pk` that fixes insertion order;
`id` is the public uuid4 (or seed slug) identifier.
"""
from sqlalchemy import Column, String, Text, DateTime, Index, ForeignKey, Boolean, Integer, JSON
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class DomainModel(Base):
    """Domains table - topical categories"""
    __tablename__ = "domains"

    pk = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String(64), unique=True, nullable=False)
    name = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    icon = Column(Text, nullable=False)
    color = Column(Text, nullable=False)
    progress = Column(Integer, nullable=False, default=0)
    articles_count = Column(Integer, nullable=False, default=0)  # Cached placeholder, never reconciled
    projects_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)


class ArticleModel(Base):
    """Articles table - written content owned by one domain"""
    __tablename__ = "articles"

    pk = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String(64), unique=True, nullable=False)
    title = Column(Text, nullable=False)
    content = Column(Text, nullable=False)
    excerpt = Column(Text)
    domain_id = Column(String(64), ForeignKey("domains.id"), nullable=False)
    status = Column(String(20), nullable=False, default="draft")  # draft, in-progress, published, completed
    tags = Column(JSON, nullable=False, default=list)
    attachments = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        Index('idx_articles_domain', 'domain_id'),
    )


class ProjectModel(Base):
    """Projects table - portfolio entries owned by one domain"""
    __tablename__ = "projects"

    pk = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String(64), unique=True, nullable=False)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    content = Column(Text)
    domain_id = Column(String(64), ForeignKey("domains.id"), nullable=False)
    github_url = Column(Text)
    demo_url = Column(Text)
    status = Column(String(20), nullable=False, default="draft")  # draft, in-progress, completed
    tags = Column(JSON, nullable=False, default=list)
    technologies = Column(JSON, nullable=False, default=list)
    featured = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        Index('idx_projects_domain', 'domain_id'),
        Index('idx_projects_featured', 'featured'),
    )
