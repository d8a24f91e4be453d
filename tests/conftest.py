"""
Shared fixtures for knawat_suppliers tests.
"""
import asyncio

import httpx
import pytest
import respx

from knawat_suppliers.config import ClientConfig

BASE_URL = "https://api.example.com/api"


@pytest.fixture
def client_config():
    """ClientConfig pointing at a mock host with Basic credentials."""
    return ClientConfig(
        base_url=BASE_URL,
        basic_user="supplier-admin",
        basic_pass="s3cret",
    )


@pytest.fixture
def router():
    """respx router; unmatched requests fail the test."""
    return respx.MockRouter(assert_all_mocked=True)


@pytest.fixture
def async_http(router):
    """httpx.AsyncClient whose transport is the respx router."""
    return httpx.AsyncClient(transport=httpx.MockTransport(router.async_handler))


@pytest.fixture
def slow_async_http(router):
    """httpx.AsyncClient that yields to the event loop before each response."""

    async def handler(request):
        await asyncio.sleep(0.01)
        return await router.async_handler(request)

    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.fixture
def sync_http(router):
    """httpx.Client whose transport is the respx router."""
    return httpx.Client(transport=httpx.MockTransport(router.handler))


def api_path(path):
    """Request path as seen on the wire, including the base URL's /api prefix."""
    return f"/api{path}"
