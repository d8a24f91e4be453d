"""
Python client for the Knawat suppliers marketplace API.

    from knawat_suppliers import Products, load_config

    async with Products(key="...", secret="...", config=load_config()) as products:
        page = await products.get_products(limit=20, keyword="mavi")
"""
from .types import AuthScheme, HttpMethod, RequestContext
from .errors import ApiError, ConfigurationError, DecodeError, KnawatError
from .config import (
    DEVELOPMENT_API_URL,
    PRODUCTION_API_URL,
    ClientConfig,
    KnawatSettings,
    TimeoutConfig,
    load_config,
    resolve_base_url,
)
from .auth import AuthHandler, BasicAuthHandler, BearerAuthHandler, encode_basic
from .core import AsyncRequest, SyncRequest, Singleflight
from .client import Products, Suppliers, SyncProducts, SyncSuppliers

__all__ = [
    # Types
    "AuthScheme",
    "HttpMethod",
    "RequestContext",
    # Errors
    "ApiError",
    "ConfigurationError",
    "DecodeError",
    "KnawatError",
    # Config
    "DEVELOPMENT_API_URL",
    "PRODUCTION_API_URL",
    "ClientConfig",
    "KnawatSettings",
    "TimeoutConfig",
    "load_config",
    "resolve_base_url",
    # Auth
    "AuthHandler",
    "BasicAuthHandler",
    "BearerAuthHandler",
    "encode_basic",
    # Request primitives
    "AsyncRequest",
    "SyncRequest",
    "Singleflight",
    # Clients
    "Products",
    "Suppliers",
    "SyncProducts",
    "SyncSuppliers",
]

__version__ = "0.1.0"
