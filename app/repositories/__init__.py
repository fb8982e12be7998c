"""Storage backends and the factory that picks one from settings."""
import logging

from app.core.interfaces import IStorage
from app.repositories.memory_storage import MemStorage
from app.repositories.sql_storage import SqlStorage

logger = logging.getLogger(__name__)


def create_storage(settings) -> IStorage:
    """Build (but do not initialize) the storage backend named by settings."""
    if settings.storage_backend == "sql":
        logger.info("Using SQL storage backend")
        return SqlStorage(settings.database_url, hours_learned=settings.hours_learned)

    logger.info("Using in-memory storage backend")
    return MemStorage(hours_learned=settings.hours_learned)


__all__ = ["create_storage", "MemStorage", "SqlStorage"]
