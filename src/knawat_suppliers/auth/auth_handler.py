"""
Auth handler utilities for knawat_suppliers.

A client picks exactly one handler at construction time; the handler type is
the authentication mode and never changes afterwards.
"""
import base64
import logging
from abc import ABC, abstractmethod
from typing import Dict, Optional

from ..config import ClientConfig, mask_sensitive
from ..errors import ConfigurationError
from ..types import AuthScheme, RequestContext

logger = logging.getLogger("knawat_suppliers.auth")

AUTHORIZATION_HEADER = "Authorization"


def encode_basic(username: str, password: str) -> str:
    """Return the ``Basic <base64(username:password)>`` header value."""
    raw = f"{username}:{password}".encode("utf-8")
    return "Basic " + base64.b64encode(raw).decode("ascii")


def mask_auth_header(value: Optional[str]) -> str:
    """Mask an Authorization header value, keeping the scheme readable."""
    if not value:
        return "<empty>"
    scheme, _, credentials = value.partition(" ")
    if not credentials:
        return mask_sensitive(value)
    return f"{scheme} {mask_sensitive(credentials)}"


class AuthHandler(ABC):
    """Auth handler interface."""

    scheme: AuthScheme

    @abstractmethod
    def get_header(self, context: RequestContext) -> Optional[Dict[str, str]]:
        """Get auth header for request."""
        ...


class BasicAuthHandler(AuthHandler):
    """Basic auth handler.

    The header is computed from the config on every call and never cached.
    """

    scheme: AuthScheme = "Basic"

    def __init__(self, config: ClientConfig):
        self._config = config

    def get_header(self, context: RequestContext) -> Optional[Dict[str, str]]:
        """Get basic auth header, failing fast when credentials are missing."""
        username = self._config.basic_user
        password = self._config.basic_pass
        if not username or not password:
            raise ConfigurationError("Basic authentication requires a username and password")

        value = encode_basic(username, password)
        logger.debug(
            f"BasicAuthHandler.get_header: {context.method} {context.path} "
            f"user={username!r} -> {AUTHORIZATION_HEADER}={mask_auth_header(value)}"
        )
        return {AUTHORIZATION_HEADER: value}


class BearerAuthHandler(AuthHandler):
    """Bearer token auth handler.

    Holds the consumer key/secret used for the token exchange and the
    memoized session token.
    """

    scheme: AuthScheme = "Bearer"

    def __init__(
        self,
        key: Optional[str] = None,
        secret: Optional[str] = None,
        token: Optional[str] = None,
    ):
        if (not key or not secret) and not token:
            raise ConfigurationError("Not a valid consumer key and secret or token")
        self.key = key
        self.secret = secret
        self._token = token or None

    @property
    def token(self) -> Optional[str]:
        return self._token

    @property
    def can_refresh(self) -> bool:
        return bool(self.key and self.secret)

    def set_token(self, token: str) -> None:
        if not token:
            raise ConfigurationError("token must be a non-empty string")
        self._token = token
        logger.debug(f"BearerAuthHandler.set_token: token={mask_sensitive(token)}")

    def clear_token(self) -> None:
        self._token = None

    def credentials(self) -> Dict[str, Optional[str]]:
        """Body of the token exchange request."""
        return {"key": self.key, "secret": self.secret}

    def get_header(self, context: RequestContext) -> Optional[Dict[str, str]]:
        """Get bearer auth header, or None until a token exists."""
        if not self._token:
            return None
        return {AUTHORIZATION_HEADER: f"Bearer {self._token}"}

    def __repr__(self) -> str:
        return (
            f"BearerAuthHandler(key={mask_sensitive(self.key)!r}, "
            f"secret={mask_sensitive(self.secret)!r}, "
            f"token={mask_sensitive(self._token)!r})"
        )
