"""
Configuration for knawat_suppliers.

``ClientConfig`` is the explicit configuration handed to every client.
``load_config`` is the one place the process environment is read.
"""
import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union
from urllib.parse import urlparse

from pydantic_settings import BaseSettings

from .errors import ConfigurationError

logger = logging.getLogger("knawat_suppliers.config")

PRODUCTION_API_URL = "https://suppliers.knawat.io/api"
DEVELOPMENT_API_URL = "https://dev.suppliers.knawat.io/api"
DEFAULT_CONTENT_TYPE = "application/json"


def _default_headers() -> Dict[str, str]:
    return {"Content-Type": DEFAULT_CONTENT_TYPE}


@dataclass
class TimeoutConfig:
    """Timeout configuration in seconds."""

    connect: float = 5.0
    read: float = 30.0
    write: float = 10.0


DEFAULT_TIMEOUT = TimeoutConfig()


@dataclass
class ClientConfig:
    """Client configuration.

    Basic credentials are read from this object on every Basic-authenticated
    call, so updating ``basic_user``/``basic_pass`` takes effect on the next
    request.
    """

    base_url: str = DEVELOPMENT_API_URL
    headers: Dict[str, str] = field(default_factory=_default_headers)
    basic_user: Optional[str] = None
    basic_pass: Optional[str] = None
    timeout: Union[TimeoutConfig, float, None] = None
    verify_ssl: bool = True
    raise_for_status: bool = False
    verbose: bool = False

    def __repr__(self) -> str:
        """Safe repr that masks the Basic password."""
        return (
            f"ClientConfig(base_url={self.base_url!r}, "
            f"basic_user={self.basic_user!r}, "
            f"basic_pass={mask_sensitive(self.basic_pass)!r}, "
            f"raise_for_status={self.raise_for_status!r}, "
            f"verbose={self.verbose!r})"
        )


class KnawatSettings(BaseSettings):
    """Settings loaded from environment variables."""

    knawat_env: str = "development"
    knawat_api_url: Optional[str] = None
    basic_user: Optional[str] = None
    basic_pass: Optional[str] = None
    knawat_timeout: float = 30.0
    knawat_verify_ssl: bool = True
    knawat_raise_for_status: bool = False
    knawat_verbose: bool = False

    class Config:
        case_sensitive = False
        env_file = None  # Use system env only

    @property
    def base_url(self) -> str:
        if self.knawat_api_url:
            return self.knawat_api_url
        return resolve_base_url(self.knawat_env)


class DefaultSerializer:
    """Default JSON serializer."""

    def serialize(self, data: Any) -> str:
        """Serialize data to JSON string."""
        return json.dumps(data)

    def deserialize(self, text: str) -> Any:
        """Deserialize JSON string to data."""
        return json.loads(text)


default_serializer = DefaultSerializer()


def mask_sensitive(value: Optional[str], visible_chars: int = 4) -> str:
    """Mask sensitive value for safe logging."""
    if value is None:
        return "<None>"
    if len(value) <= visible_chars:
        return "*" * len(value)
    return value[:visible_chars] + "*" * (len(value) - visible_chars)


def resolve_base_url(environment: Optional[str]) -> str:
    """Select the API host for an environment name."""
    if environment and environment.strip().lower() == "production":
        return PRODUCTION_API_URL
    return DEVELOPMENT_API_URL


def _is_ssl_verify_disabled_by_env() -> bool:
    """
    Check if SSL verification is disabled via environment variables.

    Returns True if any of these are set:
    - NODE_TLS_REJECT_UNAUTHORIZED=0
    - SSL_CERT_VERIFY=0
    """
    node_tls = os.environ.get("NODE_TLS_REJECT_UNAUTHORIZED", "")
    ssl_cert_verify = os.environ.get("SSL_CERT_VERIFY", "")
    return node_tls == "0" or ssl_cert_verify == "0"


def load_config(**overrides: Any) -> ClientConfig:
    """Build a ClientConfig from the process environment.

    Keyword arguments override the values read from the environment, e.g.
    ``load_config(verbose=True)``.
    """
    settings = KnawatSettings()
    config = ClientConfig(
        base_url=settings.base_url,
        basic_user=settings.basic_user,
        basic_pass=settings.basic_pass,
        timeout=settings.knawat_timeout,
        verify_ssl=settings.knawat_verify_ssl and not _is_ssl_verify_disabled_by_env(),
        raise_for_status=settings.knawat_raise_for_status,
        verbose=settings.knawat_verbose,
    )
    for name, value in overrides.items():
        if not hasattr(config, name):
            raise ConfigurationError(f"Unknown config option: {name}")
        setattr(config, name, value)

    logger.debug(f"load_config: env={settings.knawat_env!r}, config={config!r}")
    return config


def normalize_timeout(timeout: Union[TimeoutConfig, float, None]) -> TimeoutConfig:
    """Normalize timeout config."""
    if timeout is None:
        return DEFAULT_TIMEOUT
    if isinstance(timeout, (int, float)):
        return TimeoutConfig(connect=timeout, read=timeout, write=timeout)
    return timeout


def validate_config(config: ClientConfig) -> None:
    """Validate client configuration.

    Credentials are not checked here. Basic credentials are
    only required when a Basic-authenticated call is made.
    """
    if not config.base_url:
        raise ConfigurationError("base_url is required")

    parsed = urlparse(config.base_url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConfigurationError(f"Invalid base_url: {config.base_url}")
