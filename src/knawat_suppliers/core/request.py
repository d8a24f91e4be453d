"""
Shared HTTP primitive for the resource clients, built on httpx.

``AsyncRequest.fetch`` and ``SyncRequest.fetch`` attach the auth header,
serialize the options for the verb, perform the call and return the parsed
JSON body.
"""
import logging
from typing import Any, Dict, Optional, Tuple

import httpx

from .. import console
from ..auth import AUTHORIZATION_HEADER, AuthHandler, mask_auth_header
from ..config import (
    ClientConfig,
    default_serializer,
    load_config,
    normalize_timeout,
    validate_config,
)
from ..errors import ApiError, DecodeError
from ..types import HttpMethod, RequestContext
from .request_builder import prepare_request

logger = logging.getLogger("knawat_suppliers.request")


def _build_timeout(config: ClientConfig) -> httpx.Timeout:
    timeout = normalize_timeout(config.timeout)
    return httpx.Timeout(
        connect=timeout.connect,
        read=timeout.read,
        write=timeout.write,
        pool=timeout.connect,
    )


class BaseRequest:
    """State shared by the async and sync request primitives.

    ``headers`` is the per-instance header map; it is reused by reference on
    every call and receives the Authorization value produced by the auth
    handler.
    """

    # Paths sent without the Authorization header
    unauthenticated_paths: Tuple[str, ...] = ()

    def __init__(self, auth: AuthHandler, config: Optional[ClientConfig] = None):
        self.config = config if config is not None else load_config()
        validate_config(self.config)
        self.headers: Dict[str, str] = dict(self.config.headers)
        self._auth = auth
        self._serializer = default_serializer
        self._closed = False

    @property
    def auth(self) -> AuthHandler:
        return self._auth

    @property
    def authentication(self) -> str:
        """Active authentication scheme, ``Basic`` or ``Bearer``."""
        return self._auth.scheme

    @property
    def closed(self) -> bool:
        return self._closed

    def _prepare(self, method: str, path: str, options: Optional[Any]):
        """Apply auth and resolve URL and body. Raises before any network activity."""
        if self._closed:
            raise RuntimeError("Client has been closed")

        method = method.upper()
        context = RequestContext(method=method, path=path, options=options)
        auth_header = self._auth.get_header(context)
        if auth_header:
            self.headers.update(auth_header)

        url, body = prepare_request(self.config.base_url, method, path, options, self._serializer)
        headers = self.headers
        if path in self.unauthenticated_paths:
            headers = {name: value for name, value in headers.items() if name != AUTHORIZATION_HEADER}

        logger.debug(
            f"{type(self).__name__}.fetch: {method} {url} "
            f"auth={self.authentication} "
            f"{AUTHORIZATION_HEADER}={mask_auth_header(headers.get(AUTHORIZATION_HEADER))}"
        )
        if self.config.verbose:
            console.print_request(method, url, headers, body)

        return method, url, headers, body

    def _handle_response(self, response: httpx.Response, method: str, url: str) -> Any:
        """Parse the response body as JSON, regardless of status or content type."""
        text = response.text
        try:
            data = self._serializer.deserialize(text)
        except ValueError as error:
            logger.warning(
                f"{type(self).__name__}.fetch: {method} {url} returned "
                f"{response.status_code} with a non-JSON body"
            )
            raise DecodeError(
                f"Invalid JSON in response from {method} {url} (status {response.status_code})",
                status=response.status_code,
                text=text,
            ) from error

        if self.config.verbose:
            console.print_response(url, response.status_code, response.reason_phrase or "", data)

        if not response.is_success:
            logger.debug(f"{type(self).__name__}.fetch: {method} {url} -> {response.status_code}")
            if self.config.raise_for_status:
                raise ApiError(
                    f"{method} {url} failed with status {response.status_code}",
                    status=response.status_code,
                    data=data,
                )

        return data


class AsyncRequest(BaseRequest):
    """Asynchronous request primitive."""

    def __init__(
        self,
        auth: AuthHandler,
        config: Optional[ClientConfig] = None,
        httpx_client: Optional[httpx.AsyncClient] = None,
    ):
        super().__init__(auth, config)
        if httpx_client is not None:
            self._client = httpx_client
        else:
            self._client = httpx.AsyncClient(
                timeout=_build_timeout(self.config),
                verify=self.config.verify_ssl,
            )

    async def fetch(self, method: HttpMethod, path: str, options: Optional[Any] = None) -> Any:
        """Perform one API call and return the parsed JSON body."""
        method, url, headers, body = self._prepare(method, path, options)
        response = await self._client.request(
            method=method,
            url=url,
            headers=headers,
            content=body,
        )
        return self._handle_response(response, method, url)

    async def close(self) -> None:
        """Close the client."""
        self._closed = True
        await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


class SyncRequest(BaseRequest):
    """Synchronous request primitive."""

    def __init__(
        self,
        auth: AuthHandler,
        config: Optional[ClientConfig] = None,
        httpx_client: Optional[httpx.Client] = None,
    ):
        super().__init__(auth, config)
        if httpx_client is not None:
            self._client = httpx_client
        else:
            self._client = httpx.Client(
                timeout=_build_timeout(self.config),
                verify=self.config.verify_ssl,
            )

    def fetch(self, method: HttpMethod, path: str, options: Optional[Any] = None) -> Any:
        """Perform one API call and return the parsed JSON body."""
        method, url, headers, body = self._prepare(method, path, options)
        response = self._client.request(
            method=method,
            url=url,
            headers=headers,
            content=body,
        )
        return self._handle_response(response, method, url)

    def close(self) -> None:
        """Close the client."""
        self._closed = True
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
