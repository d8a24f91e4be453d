"""
Type definitions for knawat_suppliers.
"""
from dataclasses import dataclass
from typing import Any, Literal, Optional

# HTTP methods used by the suppliers API
HttpMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE"]

# Authentication schemes
AuthScheme = Literal["Basic", "Bearer"]


@dataclass
class RequestContext:
    """Request context passed to auth handlers."""

    method: HttpMethod
    path: str
    options: Optional[Any] = None
