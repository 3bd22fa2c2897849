from contextlib import asynccontextmanager

import pytest
from httpx import ASGITransport, AsyncClient

from invitation.config.settings import Settings
from invitation.main import app
from invitation.rsvp.tests.inmemory_http import MockHttpClient


@pytest.fixture(scope="function")
async def client():
    """Create a test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def client_factory():
    """
    Build a test client with FastAPI dependency overrides.

        async with client_factory({get_rsvp_forwarder: lambda: forwarder}) as client:
            ...
    """

    @asynccontextmanager
    async def _factory(overrides: dict | None = None):
        app.dependency_overrides.update(overrides or {})
        try:
            transport = ASGITransport(app=app)
            async with AsyncClient(transport=transport, base_url="http://test") as ac:
                yield ac
        finally:
            app.dependency_overrides.clear()

    return _factory


@pytest.fixture
def mock_http_client() -> MockHttpClient:
    return MockHttpClient()


@pytest.fixture
def dev_settings() -> Settings:
    """Development build, no backend configured: posting is off unless forced."""
    return Settings(
        _env_file=None,
        ENVIRONMENT="development",
        API_BASE_URL="",
        RSVP_ENDPOINT="",
        RSVP_POST_ENABLED=None,
    )


@pytest.fixture
def posting_settings() -> Settings:
    """Development build with posting forced on and no base URL."""
    return Settings(
        _env_file=None,
        ENVIRONMENT="development",
        API_BASE_URL="",
        RSVP_ENDPOINT="",
        RSVP_POST_ENABLED=True,
    )


@pytest.fixture
def production_settings() -> Settings:
    return Settings(
        _env_file=None,
        ENVIRONMENT="production",
        API_BASE_URL="",
        RSVP_ENDPOINT="",
        RSVP_POST_ENABLED=None,
    )
