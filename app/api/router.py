"""
==============================================================================
Main API Router
==============================================================================

Mounts the v1 catalog routes under /api/v1:

    GET  /api/v1/health                 catalog status
    GET  /api/v1/products               list products
    GET  /api/v1/products/stats         catalog statistics
    GET  /api/v1/products/{product_id}  single product or 404
    POST /api/v1/scans                  resolve a scanned payload

==============================================================================
"""

from fastapi import APIRouter

from app.api.v1 import health, products, scans


API_PREFIX = "/api/v1"


class MainAPIRouter:
    """Single entry point for the versioned catalog API."""

    def __init__(self, prefix: str = API_PREFIX):
        self._router = APIRouter(prefix=prefix)
        for module in (health, products, scans):
            self._router.include_router(module.router)

    @property
    def router(self) -> APIRouter:
        """Get the FastAPI router instance."""
        return self._router


api_router = MainAPIRouter().router
