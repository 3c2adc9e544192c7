"""
==============================================================================
Product Catalog Module
==============================================================================

In-memory product catalog with identifier lookup.

Features:
---------
- Immutable, ordered product storage (safe to share across threads)
- Exact, case-sensitive lookup with first-match semantics
- One-shot load lifecycle: unloaded -> ready | failed

==============================================================================
"""

from __future__ import annotations

import enum
import logging
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from app.core.exceptions import CatalogError, CatalogNotReadyError, catalog_already_loaded
from .loader import load_products_from_file
from .models import Product


# Module logger
logger = logging.getLogger(__name__)


class ProductCatalog:
    """
    Read-only product catalog.

    Holds the products produced by the loader and answers point
    queries by identifier. The catalog never changes after construction.

    Example:
        >>> catalog = ProductCatalog(load_products_from_file("data/products.yaml"))
        >>> catalog.lookup("A1")
        Product(id='A1', name='Widget', ...)
        >>> catalog.lookup("missing") is None
        True
    """

    def __init__(self, products: Iterable[Product]) -> None:
        self._products: Tuple[Product, ...] = tuple(products)

    @classmethod
    def from_file(cls, products_file: Path, **options) -> ProductCatalog:
        """Build a catalog from a YAML file."""
        return cls(load_products_from_file(products_file, **options))

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def products(self) -> Tuple[Product, ...]:
        """Get all products in source order."""
        return self._products

    def __len__(self) -> int:
        return len(self._products)

    def __iter__(self) -> Iterator[Product]:
        return iter(self._products)

    def __contains__(self, identifier: object) -> bool:
        return isinstance(identifier, str) and self.lookup(identifier) is not None

    # =========================================================================
    # SEARCH METHODS
    # =========================================================================

    def lookup(self, identifier: str) -> Optional[Product]:
        """
        Find the first product whose id equals ``identifier`` exactly.

        Args:
            identifier: Raw decoded scan payload

        Returns:
            Product or None
        """
        for product in self._products:
            if product.id == identifier:
                return product
        return None

    def ids(self) -> List[str]:
        """Get product ids in source order."""
        return [product.id for product in self]

    def get_stats(self) -> Dict:
        """Get catalog statistics."""
        return {
            "total_products": len(self._products),
            "unique_ids": len(set(self.ids())),
        }


class CatalogState(str, enum.Enum):
    """Lifecycle of the catalog service."""

    UNLOADED = "unloaded"
    READY = "ready"
    FAILED = "failed"


class CatalogService:
    """
    Owner of the product catalog for the process lifetime.

    Loads the catalog exactly once. A failed load is terminal: the
    service never serves lookups afterwards.

    Attributes:
        state: Current lifecycle state
        error: Error that caused the FAILED state, if any

    Example:
        >>> service = CatalogService(Path("data/products.yaml"))
        >>> service.load()
        >>> service.lookup("A1")
    """

    def __init__(
        self,
        products_file: Path,
        skip_invalid: bool = False,
        allow_duplicate_ids: bool = False
    ) -> None:
        self._products_file = Path(products_file)
        self._skip_invalid = skip_invalid
        self._allow_duplicate_ids = allow_duplicate_ids
        self._catalog: Optional[ProductCatalog] = None
        self._state = CatalogState.UNLOADED
        self._error: Optional[CatalogError] = None

    @property
    def state(self) -> CatalogState:
        return self._state

    @property
    def error(self) -> Optional[CatalogError]:
        return self._error

    @property
    def is_ready(self) -> bool:
        return self._state is CatalogState.READY

    @property
    def catalog(self) -> ProductCatalog:
        """
        Get the loaded catalog.

        Raises:
            CatalogNotReadyError: If the catalog is not loaded
        """
        if self._catalog is None or not self.is_ready:
            raise CatalogNotReadyError(self._state.value)
        return self._catalog

    def load(self) -> ProductCatalog:
        """
        Load the catalog file and transition to READY.

        Raises:
            CatalogError: If called more than once, or if loading fails
                (the service is then FAILED for good)
        """
        if self._state is not CatalogState.UNLOADED:
            raise catalog_already_loaded()

        try:
            catalog = ProductCatalog.from_file(
                self._products_file,
                skip_invalid=self._skip_invalid,
                allow_duplicate_ids=self._allow_duplicate_ids
            )
        except CatalogError as e:
            self._state = CatalogState.FAILED
            self._error = e
            logger.error(f"❌ Failed to load catalog: {e.message}")
            raise

        self._catalog = catalog
        self._state = CatalogState.READY
        return catalog

    def lookup(self, identifier: str) -> Optional[Product]:
        """
        Look up a product in the loaded catalog.

        Raises:
            CatalogNotReadyError: If the catalog is not loaded
        """
        return self.catalog.lookup(identifier)
