"""
Pytest configuration and shared fixtures.
"""
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from app.config import Settings
from app.main import create_app
from app.repositories import MemStorage, SqlStorage

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture(params=["memory", "sql"])
async def storage(request):
    """
    Fresh, initialized storage for each test.

    Parametrized so every storage test runs against both backends.
    """
    if request.param == "sql":
        store = SqlStorage(TEST_DATABASE_URL)
    else:
        store = MemStorage()

    await store.initialize()

    yield store

    await store.close()


@pytest.fixture
def settings(monkeypatch):
    """Settings isolated from the developer's environment / .env file"""
    monkeypatch.setenv("STORAGE_BACKEND", "memory")
    monkeypatch.setenv("HOURS_LEARNED", "1240")
    monkeypatch.delenv("CORS_ORIGINS", raising=False)
    return Settings()


@pytest.fixture
def client(settings):
    """TestClient around a new app - the lifespan creates a new store"""
    with TestClient(create_app(settings)) as test_client:
        yield test_client
