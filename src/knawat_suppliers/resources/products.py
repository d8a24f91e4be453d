"""
Catalog, category and order endpoints (Bearer authentication).
"""
from typing import Any, Dict, List, Optional, Union

from ..core.request_builder import drop_none, path_segment


class ProductsResource:
    """Endpoint methods for a supplier's products and orders.

    Each method returns whatever ``self.fetch`` returns: the parsed body on
    a sync client, an awaitable of it on an async client.
    """

    def update_supplier(self, supplier: Dict[str, Any]):
        """Update the authenticated supplier."""
        return self.fetch("PUT", "/suppliers", {"supplier": supplier})

    def get_products(
        self,
        limit: int = 10,
        page: int = 1,
        qualified: Optional[int] = None,
        category_id: Optional[Union[str, int]] = None,
        keyword: Optional[str] = None,
        stock: Optional[Dict[str, int]] = None,
        price: Optional[Dict[str, float]] = None,
        sort_by: Optional[str] = None,
        sort_asc: Optional[int] = None,
        language: Optional[str] = "tr",
    ):
        """Get a page of imported products.

        Args:
            limit: Page size.
            page: Page number, starting at 1.
            qualified: 1 qualified, 2 needs review, 4 disqualified, 5 draft.
            category_id: Category ids, e.g. ``"1,57"``, or ``-1``.
            keyword: Free text search, e.g. ``"mavi"``.
            stock: ``{"stock_from": 12, "stock_to": 50}``.
            price: ``{"price_from": 12, "price_to": 50}``.
            sort_by: ``name``, ``stock``, ``qualified`` or ``price``.
            sort_asc: ``1`` ascending, ``-1`` descending.
            language: ``tr``, ``en`` or ``ar``.

        Filters left as None are not sent.
        """
        query = drop_none(
            {
                "limit": limit,
                "page": page,
                "qualified": qualified,
                "category_id": category_id,
                "keyword": keyword,
                "stock": stock,
                "price": price,
                "sort_by": sort_by,
                "sort_asc": sort_asc,
                "language": language,
            }
        )
        return self.fetch("GET", "/catalog/products", query)

    def get_product_by_sku(self, sku: str):
        """Get a product by SKU."""
        return self.fetch("GET", f"/catalog/products/{path_segment(sku)}")

    def add_products(self, products: List[Dict[str, Any]]):
        """Add products to the catalog."""
        return self.fetch("POST", "/catalog/products", {"products": products})

    def update_product_by_sku(self, sku: str, data: Dict[str, Any]):
        """Update a product by SKU."""
        return self.fetch("PUT", f"/catalog/update/{path_segment(sku)}", {"data": data})

    def update_bulk_product(self, data: Any):
        """Bulk product update; ``data`` is sent as the body verbatim."""
        return self.fetch("PATCH", "/catalog/products", data)

    def get_categories(self, parent_id: Optional[int] = None, level: Optional[int] = None):
        """Get catalog categories.

        ``parent_id`` and ``level`` are only sent when strictly positive.
        """
        query: Dict[str, int] = {}
        if parent_id and parent_id > 0:
            query["parentId"] = parent_id
        if level and level > 0:
            query["level"] = level
        return self.fetch("GET", "/catalog/categories", query)

    def get_orders(self, limit: int = 25, page: int = 1):
        """Get a page of current orders."""
        return self.fetch("GET", "/orders", {"limit": limit, "page": page})

    def get_order_by_id(self, id: str):
        """Get a single order by its id."""
        return self.fetch("GET", f"/orders/{path_segment(id)}")

    def cancel_order(self, id: str):
        """Cancel an order by its id."""
        return self.fetch("DELETE", f"/orders/{path_segment(id)}")

    def create_order(self, data: Any):
        """Create an order; ``data`` is sent as the body verbatim."""
        return self.fetch("POST", "/orders", data)

    def update_order(self, order_id: str, data: Any):
        """Update an order; ``data`` is sent as the body verbatim."""
        return self.fetch("PUT", f"/orders/{path_segment(order_id)}", data)
