"""
Core module exports.
"""
from .request import AsyncRequest, BaseRequest, SyncRequest
from .request_builder import (
    build_url,
    build_body,
    drop_none,
    path_segment,
    prepare_request,
    serialize_query,
)
from .singleflight import Singleflight, SingleflightResult

__all__ = [
    "AsyncRequest",
    "BaseRequest",
    "SyncRequest",
    "build_url",
    "build_body",
    "drop_none",
    "path_segment",
    "prepare_request",
    "serialize_query",
    "Singleflight",
    "SingleflightResult",
]
