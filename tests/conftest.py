# tests/conftest.py
import os

# in-memory database for the whole test session; must be set before the app is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("ENVIRONMENT", "test")

import pytest
from httpx import AsyncClient, ASGITransport
from asgi_lifespan import LifespanManager

from core.config import PLACEHOLDER_DATABASE_URLS, settings
from database.connection import create_tables, drop_tables
from main import app


@pytest.fixture(scope="session")
def anyio_backend():
    # keep AnyIO on asyncio for the whole test session
    return "asyncio"


@pytest.fixture(scope="session")
async def test_client():
    # Start FastAPI lifespan once for the whole session
    async with LifespanManager(app):
        transport = ASGITransport(app=app, raise_app_exceptions=True)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac


@pytest.fixture(autouse=True)
def clean_database():
    drop_tables()
    create_tables()
    yield


@pytest.fixture(params=["", *PLACEHOLDER_DATABASE_URLS], ids=["unset", "placeholder-postgres", "placeholder-supabase"])
def no_database(request, monkeypatch):
    """Behave as if DATABASE_URL was never set, or still holds a placeholder"""
    monkeypatch.setattr(settings, "DATABASE_URL", request.param)
    yield
