"""
Tests for the Suppliers clients (Basic authentication).
Verifies the path: Client -> Auth handler -> Request builder -> Wire
"""
import json

import pytest
from httpx import Response

from knawat_suppliers import Suppliers, SyncSuppliers
from knawat_suppliers.auth import encode_basic
from knawat_suppliers.errors import ConfigurationError

from conftest import api_path


class TestSuppliers:
    """Tests for the async Suppliers client."""

    @pytest.fixture
    def suppliers(self, client_config, async_http):
        return Suppliers(config=client_config, httpx_client=async_http)

    def test_uses_basic_auth(self, suppliers):
        assert suppliers.authentication == "Basic"

    @pytest.mark.asyncio
    async def test_get_suppliers(self, suppliers, router):
        route = router.get(path=api_path("/suppliers")).mock(
            return_value=Response(200, json=[{"id": 1, "name": "john"}])
        )

        result = await suppliers.get_suppliers()

        assert result == [{"id": 1, "name": "john"}]
        request = route.calls.last.request
        assert request.content == b""
        assert request.headers["Authorization"] == encode_basic("supplier-admin", "s3cret")

    @pytest.mark.asyncio
    async def test_create_supplier(self, suppliers, router):
        supplier = {"name": "john", "url": "https://example.com.tr", "currency": "TRY"}
        route = router.post(path=api_path("/suppliers")).mock(return_value=Response(201, json={"id": 7}))

        result = await suppliers.create_supplier(supplier)

        assert result == {"id": 7}
        assert json.loads(route.calls.last.request.content) == {"supplier": supplier}

    @pytest.mark.asyncio
    async def test_get_supplier_keys(self, suppliers, router):
        route = router.get(path=api_path("/suppliers/42/keys")).mock(
            return_value=Response(200, json={"key": "k", "secret": "s"})
        )

        result = await suppliers.get_supplier_keys(42)

        assert result == {"key": "k", "secret": "s"}
        assert route.called

    # State: Basic header recomputed when credentials change between calls
    @pytest.mark.asyncio
    async def test_header_follows_config_changes(self, suppliers, client_config, router):
        route = router.get(path=api_path("/suppliers")).mock(return_value=Response(200, json=[]))

        await suppliers.get_suppliers()
        client_config.basic_user = "other-admin"
        client_config.basic_pass = "other-pass"
        await suppliers.get_suppliers()

        first, second = [call.request.headers["Authorization"] for call in route.calls]
        assert first == encode_basic("supplier-admin", "s3cret")
        assert second == encode_basic("other-admin", "other-pass")

    # Error Path: no credentials configured
    @pytest.mark.asyncio
    async def test_missing_credentials(self, client_config, async_http, router):
        client_config.basic_user = None
        route = router.get(path=api_path("/suppliers")).mock(return_value=Response(200, json=[]))
        suppliers = Suppliers(config=client_config, httpx_client=async_http)

        with pytest.raises(ConfigurationError):
            await suppliers.get_suppliers()

        assert not route.called

    # Path: config loaded from the environment when not injected
    def test_default_config_from_env(self, monkeypatch, async_http):
        monkeypatch.setenv("KNAWAT_ENV", "production")
        monkeypatch.delenv("KNAWAT_API_URL", raising=False)
        monkeypatch.setenv("BASIC_USER", "env-user")
        monkeypatch.setenv("BASIC_PASS", "env-pass")

        suppliers = Suppliers(httpx_client=async_http)

        assert suppliers.config.base_url == "https://suppliers.knawat.io/api"
        assert suppliers.config.basic_user == "env-user"


class TestSyncSuppliers:
    """Tests for the sync Suppliers client."""

    @pytest.fixture
    def suppliers(self, client_config, sync_http):
        return SyncSuppliers(config=client_config, httpx_client=sync_http)

    def test_get_suppliers(self, suppliers, router):
        router.get(path=api_path("/suppliers")).mock(return_value=Response(200, json=[]))

        assert suppliers.get_suppliers() == []

    def test_create_supplier(self, suppliers, router):
        route = router.post(path=api_path("/suppliers")).mock(return_value=Response(201, json={"id": 7}))

        suppliers.create_supplier({"name": "john"})

        assert json.loads(route.calls.last.request.content) == {"supplier": {"name": "john"}}

    def test_get_supplier_keys_encodes_id(self, suppliers, router):
        route = router.get(url__regex=r".*/keys$").mock(return_value=Response(200, json={}))

        suppliers.get_supplier_keys("a/b")

        assert b"/api/suppliers/a%2Fb/keys" == route.calls.last.request.url.raw_path
