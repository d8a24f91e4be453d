"""
Auth module exports.
"""
from .auth_handler import (
    AUTHORIZATION_HEADER,
    AuthHandler,
    BasicAuthHandler,
    BearerAuthHandler,
    encode_basic,
    mask_auth_header,
)

__all__ = [
    "AUTHORIZATION_HEADER",
    "AuthHandler",
    "BasicAuthHandler",
    "BearerAuthHandler",
    "encode_basic",
    "mask_auth_header",
]
