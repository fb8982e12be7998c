"""Database package - all database-related code."""
from app.db.connection import create_engine, create_session_maker, create_tables
from app.db.models import Base, DomainModel, ArticleModel, ProjectModel

__all__ = [
    "create_engine",
    "create_session_maker",
    "create_tables",
    "Base",
    "DomainModel",
    "ArticleModel",
    "ProjectModel",
]
