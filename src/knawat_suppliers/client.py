"""
Resource clients for the Knawat suppliers API.

``Suppliers`` and ``Products`` are asynchronous; ``SyncSuppliers`` and
``SyncProducts`` expose the same methods over a blocking httpx client.
"""
import logging
import threading
from typing import Any, Optional

import httpx

from .auth import AUTHORIZATION_HEADER, BasicAuthHandler, BearerAuthHandler
from .config import ClientConfig, load_config, mask_sensitive
from .core.request import AsyncRequest, SyncRequest
from .core.singleflight import Singleflight
from .errors import ApiError, ConfigurationError
from .resources import ProductsResource, SuppliersResource
from .types import HttpMethod

logger = logging.getLogger("knawat_suppliers.client")

TOKEN_PATH = "/token"


def _token_from_response(data: Any) -> str:
    """Extract ``user.token`` from a token exchange response."""
    try:
        token = data["user"]["token"]
    except (KeyError, TypeError, IndexError):
        token = None
    if not token or not isinstance(token, str):
        raise ApiError("Token exchange response does not contain user.token", data=data)
    return token


class Suppliers(SuppliersResource, AsyncRequest):
    """Async client for supplier administration, authenticated with Basic auth."""

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        httpx_client: Optional[httpx.AsyncClient] = None,
    ):
        config = config if config is not None else load_config()
        super().__init__(BasicAuthHandler(config), config, httpx_client)


class SyncSuppliers(SuppliersResource, SyncRequest):
    """Sync client for supplier administration, authenticated with Basic auth."""

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        httpx_client: Optional[httpx.Client] = None,
    ):
        config = config if config is not None else load_config()
        super().__init__(BasicAuthHandler(config), config, httpx_client)


class _BearerTokenMixin:
    """Token state shared by the async and sync Products clients."""

    _auth: BearerAuthHandler
    unauthenticated_paths = (TOKEN_PATH,)

    @property
    def token(self) -> Optional[str]:
        """The memoized session token, if one has been obtained."""
        return self._auth.token

    def set_token(self, token: str) -> None:
        """Install a token and write the Bearer header."""
        self._auth.set_token(token)
        self.headers[AUTHORIZATION_HEADER] = f"Bearer {token}"

    def clear_token(self) -> None:
        """Forget the token; the next call exchanges the credentials again."""
        self._auth.clear_token()
        self.headers.pop(AUTHORIZATION_HEADER, None)

    def _check_refreshable(self) -> None:
        if not self._auth.can_refresh:
            raise ConfigurationError("A consumer key and secret are required to refresh the token")
        logger.debug(f"refresh_token: exchanging key={mask_sensitive(self._auth.key)}")


class Products(_BearerTokenMixin, ProductsResource, AsyncRequest):
    """Async client for catalog and order operations, authenticated with a Bearer token.

    Either ``key`` and ``secret`` or a ready ``token`` is required. The token
    is obtained lazily from ``POST /token`` on the first call and reused
    afterwards. Concurrent first calls share a single exchange.
    """

    def __init__(
        self,
        key: Optional[str] = None,
        secret: Optional[str] = None,
        token: Optional[str] = None,
        config: Optional[ClientConfig] = None,
        httpx_client: Optional[httpx.AsyncClient] = None,
    ):
        auth = BearerAuthHandler(key=key, secret=secret, token=token)
        super().__init__(auth, config, httpx_client)
        self._token_flight = Singleflight()
        if token:
            self.set_token(token)

    async def refresh_token(self) -> str:
        """Exchange the consumer key/secret for a new token and memoize it."""
        self._check_refreshable()
        data = await self.fetch("POST", TOKEN_PATH, self._auth.credentials())
        token = _token_from_response(data)
        self.set_token(token)
        return token

    async def ensure_token(self) -> str:
        """Return the memoized token, performing the exchange on first use."""
        if self._auth.token:
            return self._auth.token
        result = await self._token_flight.do(TOKEN_PATH, self.refresh_token)
        return result.value

    async def fetch(self, method: HttpMethod, path: str, options: Optional[Any] = None) -> Any:
        if path != TOKEN_PATH:
            await self.ensure_token()
        return await super().fetch(method, path, options)


class SyncProducts(_BearerTokenMixin, ProductsResource, SyncRequest):
    """Sync client for catalog and order operations, authenticated with a Bearer token."""

    def __init__(
        self,
        key: Optional[str] = None,
        secret: Optional[str] = None,
        token: Optional[str] = None,
        config: Optional[ClientConfig] = None,
        httpx_client: Optional[httpx.Client] = None,
    ):
        auth = BearerAuthHandler(key=key, secret=secret, token=token)
        super().__init__(auth, config, httpx_client)
        self._token_lock = threading.Lock()
        if token:
            self.set_token(token)

    def refresh_token(self) -> str:
        """Exchange the consumer key/secret for a new token and memoize it."""
        self._check_refreshable()
        data = self.fetch("POST", TOKEN_PATH, self._auth.credentials())
        token = _token_from_response(data)
        self.set_token(token)
        return token

    def ensure_token(self) -> str:
        """Return the memoized token, performing the exchange on first use."""
        if self._auth.token:
            return self._auth.token
        with self._token_lock:
            if self._auth.token:
                return self._auth.token
            return self.refresh_token()

    def fetch(self, method: HttpMethod, path: str, options: Optional[Any] = None) -> Any:
        if path != TOKEN_PATH:
            self.ensure_token()
        return super().fetch(method, path, options)
