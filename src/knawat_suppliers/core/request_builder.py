"""
Request builder utilities for knawat_suppliers.
"""
import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple
from urllib.parse import quote, urlencode, urljoin, urlparse

from ..config import DefaultSerializer
from ..types import HttpMethod

logger = logging.getLogger("knawat_suppliers.request_builder")


def drop_none(params: Mapping[str, Any]) -> Dict[str, Any]:
    """Drop parameters equal to None. Other falsy values (0, "", False) are kept."""
    return {key: value for key, value in params.items() if value is not None}


def path_segment(value: Any) -> str:
    """Percent-encode a value used as a single URL path segment."""
    return quote(str(value), safe="")


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _query_pairs(options: Mapping[str, Any]) -> List[Tuple[str, str]]:
    pairs: List[Tuple[str, str]] = []
    owners: Dict[str, str] = {}
    for key, value in options.items():
        if value is None:
            continue
        if isinstance(value, Mapping):
            # {"stock": {"stock_from": 1, "stock_to": 5}} -> stock_from=1&stock_to=5
            items = _query_pairs(value)
        elif isinstance(value, (list, tuple)):
            items = [(key, _query_value(item)) for item in value if item is not None]
        else:
            items = [(key, _query_value(value))]
        for name, _ in items:
            owner = owners.setdefault(name, key)
            if owner != key:
                raise ValueError(f"Query parameter {name!r} from {key!r} collides with {owner!r}")
        pairs.extend(items)
    return pairs


def serialize_query(options: Optional[Mapping[str, Any]]) -> str:
    """Serialize an options mapping as a URL query string."""
    if not options:
        return ""
    return urlencode(_query_pairs(options))


def build_url(
    base_url: str,
    path: str,
    query: Optional[Mapping[str, Any]] = None,
) -> str:
    """Build full URL from base and path."""
    # Handle absolute paths - preserve base_url path and append the new path
    if path.startswith("/"):
        parsed = urlparse(base_url)
        base_path = parsed.path.rstrip("/")
        url = f"{parsed.scheme}://{parsed.netloc}{base_path}{path}"
    elif path:
        if not base_url.endswith("/"):
            base_url = base_url + "/"
        url = urljoin(base_url, path)
    else:
        url = base_url

    query_str = serialize_query(query)
    if query_str:
        separator = "&" if "?" in url else "?"
        url = f"{url}{separator}{query_str}"

    return url


def build_body(
    method: HttpMethod,
    options: Optional[Any],
    serializer: DefaultSerializer,
) -> Optional[str]:
    """Build the JSON request body. GET requests never carry one."""
    if method == "GET" or options is None:
        return None
    return serializer.serialize(options)


def prepare_request(
    base_url: str,
    method: HttpMethod,
    path: str,
    options: Optional[Any],
    serializer: DefaultSerializer,
) -> Tuple[str, Optional[str]]:
    """Resolve the URL and body for a call.

    GET options become the query string; for every other verb they are the
    JSON body.
    """
    if method == "GET":
        url = build_url(base_url, path, options)
        body = None
    else:
        url = build_url(base_url, path)
        body = build_body(method, options, serializer)

    logger.debug(f"prepare_request: {method} {url} has_body={body is not None}")
    return url, body
