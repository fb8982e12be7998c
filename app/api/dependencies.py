"""FastAPI dependencies shared by the routers."""
from fastapi import Request

from app.core.interfaces import IStorage


def get_storage(request: Request) -> IStorage:
    """
    Storage instance owned by the application.

    Created and initialized in the lifespan handler (app.main), so every
    request sees the same ready store without a module-level singleton.
    """
    return request.app.state.storage
