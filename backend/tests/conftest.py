# tests/conftest.py
import os

# Tests always run against the in-memory store
os.environ["USE_MONGO"] = "false"

import pytest
from httpx import AsyncClient, ASGITransport
from asgi_lifespan import LifespanManager
from donorlink.deps import get_repo
from donorlink.main import app

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

@pytest.fixture
def repo():
    r = get_repo()
    r.clear()
    yield r
    r.clear()
