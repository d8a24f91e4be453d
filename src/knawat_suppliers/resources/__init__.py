"""
Resource endpoint tables.
"""
from .products import ProductsResource
from .suppliers import SuppliersResource

__all__ = [
    "ProductsResource",
    "SuppliersResource",
]
