"""
==============================================================================
Product Catalog Endpoints
==============================================================================

Endpoints for browsing the product catalog and looking up products by id.

==============================================================================
"""

from fastapi import APIRouter, Depends, Query

from app.catalog import ProductCatalog, ProductResponse
from app.core import exceptions
from app.core.dependencies import get_catalog


router = APIRouter(prefix="/products", tags=["Products"])


class ProductController:
    """Controller for product catalog operations."""

    def __init__(self, catalog: ProductCatalog):
        self._catalog = catalog

    def list_products(self, limit: int) -> dict:
        """List products in catalog order."""
        products = self._catalog.products

        return {
            "success": True,
            "total": len(products),
            "products": [
                ProductResponse.from_product(p).model_dump()
                for p in products[:limit]
            ]
        }

    def get_by_id(self, product_id: str) -> dict:
        """Get product by id."""
        product = self._catalog.lookup(product_id)

        if not product:
            raise exceptions.product_not_found(product_id)

        return {
            "success": True,
            "product": ProductResponse.from_product(product).model_dump()
        }

    def get_stats(self) -> dict:
        """Get catalog statistics."""
        return {
            "success": True,
            "stats": self._catalog.get_stats()
        }


@router.get("")
async def list_products(
    limit: int = Query(100, ge=1, le=500),
    catalog: ProductCatalog = Depends(get_catalog)
):
    """List products."""
    controller = ProductController(catalog)
    return controller.list_products(limit)


@router.get("/stats")
async def get_catalog_stats(catalog: ProductCatalog = Depends(get_catalog)):
    """Get catalog statistics."""
    controller = ProductController(catalog)
    return controller.get_stats()


@router.get("/{product_id}")
async def get_product(product_id: str, catalog: ProductCatalog = Depends(get_catalog)):
    """Get product by id (exact, case-sensitive)."""
    controller = ProductController(catalog)
    return controller.get_by_id(product_id)
