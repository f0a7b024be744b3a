from __future__ import annotations

from collections.abc import AsyncIterator, Iterator

import pytest
from httpx import ASGITransport, AsyncClient

from user_registry.config import get_settings
from user_registry.main import create_app

CORRELATION_ID = "3fa85f64-5717-4562-b3fc-2c963f66afa6"


@pytest.fixture(autouse=True)
def test_environment() -> Iterator[None]:
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
async def api_client() -> AsyncIterator[AsyncClient]:
    # A fresh app per test means a fresh, empty user store.
    transport = ASGITransport(app=create_app())
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def correlation_headers() -> dict[str, str]:
    return {"X-CorrelationId": CORRELATION_ID}


@pytest.fixture
def valid_user() -> dict:
    return {
        "firstName": "Ada",
        "lastName": "Lovelace",
        "email": "ada@example.com",
        "password": "analytical1",
        "age": 36,
    }
