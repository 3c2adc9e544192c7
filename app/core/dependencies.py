"""
==============================================================================
FastAPI Dependencies Module
==============================================================================

Dependency injection for the catalog service.

The CatalogService is created once at startup and stored on
``app.state``; routes receive it through these dependencies instead of a
module-level global.

Usage Examples:
--------------
    @router.get("/products/{product_id}")
    async def get_product(catalog: ProductCatalog = Depends(get_catalog)):
        ...

==============================================================================
"""

from __future__ import annotations

import logging

from fastapi import Depends, Request, WebSocket

from app.catalog.catalog import CatalogService, ProductCatalog
from app.core.exceptions import CatalogNotReadyError


# Module logger
logger = logging.getLogger(__name__)


def get_catalog_service(request: Request) -> CatalogService:
    """
    Get the CatalogService owned by the application.

    Raises:
        CatalogNotReadyError: If startup never attached a service
    """
    service = getattr(request.app.state, "catalog_service", None)
    if service is None:
        raise CatalogNotReadyError("unloaded")
    return service


def get_catalog(service: CatalogService = Depends(get_catalog_service)) -> ProductCatalog:
    """
    Get the loaded ProductCatalog.

    Raises:
        CatalogNotReadyError: If the catalog is not loaded
    """
    return service.catalog


def get_catalog_service_ws(websocket: WebSocket) -> CatalogService:
    """WebSocket variant of :func:`get_catalog_service`."""
    service = getattr(websocket.app.state, "catalog_service", None)
    if service is None:
        raise CatalogNotReadyError("unloaded")
    return service
