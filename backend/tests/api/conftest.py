"""API test fixtures — fresh app + httpx client per test.

Invariants:
    - Every test gets its own app, repository and settings (no shared state)
    - Repository latency is 0 unless a test builds its own repository
    - `repository` fixture can be overridden per module/test to inject doubles

Design Decisions:
    - ASGITransport: exercises the full middleware stack without a server;
      lifespan does not run, so create_app() owns all wiring
"""

import pytest
from httpx import ASGITransport, AsyncClient

from app.config import Settings
from app.infrastructure.user_repository import InMemoryUserRepository
from app.main import create_app


@pytest.fixture
def settings():
    return Settings(
        repository_latency_ms=0, seed_users=False, log_format="text",
    )


@pytest.fixture
def repository():
    return InMemoryUserRepository(latency_ms=0)


@pytest.fixture
def test_app(settings, repository):
    return create_app(settings=settings, repository=repository)


@pytest.fixture
async def client(test_app):
    async with AsyncClient(
        transport=ASGITransport(app=test_app), base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
def auth_headers():
    return {"Authorization": "Bearer api-key-admin-2024"}


@pytest.fixture
def ann():
    return {"firstName": "Ann", "lastName": "Lee", "email": "Ann@X.com"}
