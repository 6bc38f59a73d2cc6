"""
Contactbook API — Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixtures (all function-scoped, created fresh for each test):
    ├── contact_store: Freshly seeded ContactStore
    ├── test_app: FastAPI app bound to contact_store
    ├── test_client: HTTPX AsyncClient routed straight into test_app
    └── strict_status_codes: Switches client errors to 400/405 for one test
"""

import os

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Override settings for testing BEFORE any app imports
os.environ["LOG_LEVEL"] = "WARNING"
os.environ.pop("STRICT_STATUS_CODES", None)

from contactbook.config import settings  # noqa: E402
from contactbook.main import create_app  # noqa: E402
from contactbook.store import ContactStore  # noqa: E402


@pytest.fixture
def contact_store():
    """A store holding only the two seed records."""
    return ContactStore()


@pytest.fixture
def test_app(contact_store):
    """A fresh application instance serving `contact_store`."""
    return create_app(store=contact_store)


@pytest_asyncio.fixture
async def test_client(test_app):
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_greeting(test_client):
            response = await test_client.get("/")
            assert response.text == "hello!"
    """
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def strict_status_codes(monkeypatch):
    """Enable strict status codes for the duration of one test."""
    monkeypatch.setattr(settings, "strict_status_codes", True)
    return settings
