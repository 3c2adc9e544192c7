"""
==============================================================================
Health Check Endpoints
==============================================================================

System health status endpoints for monitoring and orchestration.

==============================================================================
"""

from fastapi import APIRouter, Depends

from app.catalog import CatalogService
from app.core.dependencies import get_catalog_service


router = APIRouter(prefix="/health", tags=["Health"])


class HealthController:
    """Controller for health check operations."""

    def __init__(self, service: CatalogService):
        self._service = service

    def check_catalog(self) -> dict:
        """Check catalog status."""
        if self._service.is_ready:
            return {"status": "healthy", "products": len(self._service.catalog)}
        return {"status": self._service.state.value, "products": 0}

    def get_health(self) -> dict:
        """Get full health status."""
        catalog_info = self.check_catalog()

        overall = "healthy" if catalog_info["status"] == "healthy" else "degraded"

        return {
            "status": overall,
            "components": {
                "api": "healthy",
                "catalog": catalog_info["status"]
            },
            "details": {
                "products_loaded": catalog_info["products"]
            }
        }


@router.get("")
async def health_check(service: CatalogService = Depends(get_catalog_service)):
    """
    Health check endpoint.

    Returns system status including API and catalog.
    """
    controller = HealthController(service)
    return controller.get_health()


@router.get("/ready")
async def readiness_check(service: CatalogService = Depends(get_catalog_service)):
    """Readiness probe: ready only once the catalog is loaded."""
    return {"ready": service.is_ready}


@router.get("/live")
async def liveness_check():
    """Liveness probe for container orchestration."""
    return {"alive": True}
