"""
Exception hierarchy for knawat_suppliers.

Transport failures are not wrapped: ``httpx.HTTPError`` subclasses reach the
caller unchanged.
"""
from typing import Any, Optional


class KnawatError(Exception):
    """Base class for all knawat_suppliers errors."""


class ConfigurationError(KnawatError, ValueError):
    """Missing or invalid client configuration (credentials, base URL)."""


class ApiError(KnawatError):
    """The API answered with an error status or an unusable payload."""

    def __init__(self, message: str, status: Optional[int] = None, data: Any = None):
        super().__init__(message)
        self.status = status
        self.data = data

    def __repr__(self) -> str:
        return f"ApiError(status={self.status!r}, message={str(self)!r})"


class DecodeError(KnawatError, ValueError):
    """Response body could not be parsed as JSON."""

    def __init__(self, message: str, status: Optional[int] = None, text: str = ""):
        super().__init__(message)
        self.status = status
        self.text = text
