"""Core module containing interfaces."""

from app.core.interfaces import IStorage

__all__ = ["IStorage"]
