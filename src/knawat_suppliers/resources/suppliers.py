"""
Supplier administration endpoints (Basic authentication).
"""
from typing import Any, Dict

from ..core.request_builder import path_segment


class SuppliersResource:
    """Endpoint methods for suppliers.

    Each method returns whatever ``self.fetch`` returns: the parsed body on
    a sync client, an awaitable of it on an async client.
    """

    def get_suppliers(self):
        """Get all suppliers."""
        return self.fetch("GET", "/suppliers")

    def create_supplier(self, supplier: Dict[str, Any]):
        """Create a supplier.

        Example payload::

            {"name": "john", "url": "https://example.com.tr",
             "logo": "https://example.com.tr/logo.png", "currency": "TRY",
             "address": [...], "contacts": [...]}
        """
        return self.fetch("POST", "/suppliers", {"supplier": supplier})

    def get_supplier_keys(self, id: Any):
        """Get the consumer key/secret pair of a supplier."""
        return self.fetch("GET", f"/suppliers/{path_segment(id)}/keys")
