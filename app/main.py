"""
==============================================================================
QR Code Scanner Catalog Service - Application Entry Point
==============================================================================

FastAPI application that loads the product catalog once at startup and
answers lookups for decoded QR/barcode payloads:
- RESTful product and scan endpoints
- WebSocket scan stream with ordered results

A catalog that cannot be loaded aborts startup; the service never
answers lookups from an empty or partial catalog.

Usage:
------
    # Development
    uvicorn app.main:app --reload

    # Production
    uvicorn app.main:app --host 0.0.0.0 --port 8000

==============================================================================
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.router import api_router
from app.catalog import CatalogService
from app.config import Settings, get_settings
from app.core.exceptions import register_exception_handlers
from app.websockets import scanner_router


# ============================================================================
# LOGGING SETUP
# ============================================================================

settings = get_settings()

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
)

logger = logging.getLogger(__name__)


# ============================================================================
# APPLICATION FACTORY
# ============================================================================

class Application:
    """
    FastAPI application factory and manager.

    Handles application lifecycle including:
    - Catalog loading at startup
    - Middleware configuration
    - Router registration
    - Exception handler setup
    """

    def __init__(self, settings: Optional[Settings] = None):
        """Initialize the application."""
        self._settings = settings or get_settings()
        self._catalog_service = CatalogService(
            self._settings.products_path,
            skip_invalid=self._settings.skip_invalid_products,
            allow_duplicate_ids=self._settings.allow_duplicate_ids
        )
        self._app = self._create_app()

    def _create_app(self) -> FastAPI:
        """Create and configure the FastAPI application."""
        app = FastAPI(
            title=self._settings.app_name,
            version="1.0.0",
            description="Product lookup for scanned QR codes and barcodes",
            lifespan=self._lifespan,
            docs_url="/docs",
            redoc_url="/redoc",
        )

        app.state.settings = self._settings
        app.state.catalog_service = self._catalog_service

        self._configure_middleware(app)
        register_exception_handlers(app)
        self._register_routers(app)
        self._register_root(app)

        return app

    @asynccontextmanager
    async def _lifespan(self, app: FastAPI):
        """Application lifespan manager."""
        self._startup()
        yield
        self._shutdown()

    def _startup(self) -> None:
        """
        Application startup tasks.

        Raises:
            CatalogError: If the catalog cannot be loaded
        """
        logger.info("=" * 60)
        logger.info(f"🚀 Starting {self._settings.app_name}")
        logger.info("=" * 60)

        if self._catalog_service.is_ready:
            logger.debug("Catalog already loaded")
        else:
            catalog = self._catalog_service.load()
            logger.info(f"✅ Loaded {len(catalog)} products")

        logger.info(f"✅ {self._settings.app_name} ready")
        logger.info(f"📍 Running on http://{self._settings.host}:{self._settings.port}")

    def _shutdown(self) -> None:
        """Application shutdown tasks."""
        logger.info("✅ Shutdown complete")

    def _configure_middleware(self, app: FastAPI) -> None:
        """Configure application middleware."""
        app.add_middleware(
            CORSMiddleware,
            allow_origins=self._settings.cors_origins_list,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    def _register_routers(self, app: FastAPI) -> None:
        """Register API routers."""
        app.include_router(api_router)
        app.include_router(scanner_router)

    def _register_root(self, app: FastAPI) -> None:
        """Register root endpoint."""

        @app.get("/")
        async def root():
            """Service banner."""
            return {
                "name": self._settings.app_name,
                "catalog": self._catalog_service.state.value,
                "docs": "/docs"
            }

    @property
    def catalog_service(self) -> CatalogService:
        """Get the catalog service owned by this application."""
        return self._catalog_service

    @property
    def app(self) -> FastAPI:
        """Get the FastAPI application instance."""
        return self._app


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build a new application instance."""
    return Application(settings).app


# ============================================================================
# APPLICATION INSTANCE
# ============================================================================

application = Application()
app = application.app


# ============================================================================
# ENTRY POINT
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level="debug" if settings.debug else "info"
    )
