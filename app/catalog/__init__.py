"""
==============================================================================
Catalog Package - Product Management
==============================================================================

Product catalog loaded once from YAML with identifier lookup.

Classes:
--------
- Product: Pydantic model for products
- ProductCatalog: Immutable catalog with lookup
- CatalogService: One-shot load lifecycle around the catalog

==============================================================================
"""

from .models import NOT_FOUND_MESSAGE, Product, ProductResponse, ScanResult
from .loader import load_products, load_products_from_file
from .catalog import CatalogService, CatalogState, ProductCatalog

__all__ = [
    "NOT_FOUND_MESSAGE",
    "Product",
    "ProductResponse",
    "ScanResult",
    "load_products",
    "load_products_from_file",
    "CatalogService",
    "CatalogState",
    "ProductCatalog",
]
