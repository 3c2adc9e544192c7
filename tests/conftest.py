"""
==============================================================================
Pytest Configuration and Fixtures
==============================================================================

Provides catalog files, loaded catalogs and API client fixtures.

==============================================================================
"""

import textwrap
from pathlib import Path
from typing import Callable, Generator

import pytest
from fastapi.testclient import TestClient

from app.catalog import ProductCatalog, load_products
from app.config import Settings
from app.main import create_app


# ============================================================================
# CATALOG FIXTURES
# ============================================================================

SAMPLE_CATALOG = """
products:
  - id: "A1"
    name: "Widget"
    price: 9.99
    weight: 0.5
  - id: "B7"
    name: "Gadget"
    price: "19.50"
    weight: "1.25"
  - id: 4601234567890
    name: "Milk 1L"
    price: 89
    weight: 1.03
    barcode_type: EAN-13
"""


@pytest.fixture
def write_catalog(tmp_path: Path) -> Callable[[str], Path]:
    """Write YAML text to a catalog file and return its path."""
    def _write(content: str, name: str = "products.yaml") -> Path:
        path = tmp_path / name
        path.write_text(textwrap.dedent(content), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def catalog_file(write_catalog) -> Path:
    """Catalog file with the sample products."""
    return write_catalog(SAMPLE_CATALOG)


@pytest.fixture
def catalog() -> ProductCatalog:
    """Catalog loaded from the sample products."""
    return ProductCatalog(load_products(SAMPLE_CATALOG))


# ============================================================================
# API FIXTURES
# ============================================================================

@pytest.fixture
def settings(catalog_file: Path) -> Settings:
    """Settings pointing at the sample catalog file."""
    return Settings(products_file=str(catalog_file), scan_queue_size=4)


@pytest.fixture
def client(settings: Settings) -> Generator[TestClient, None, None]:
    """Test client with the catalog loaded through the app lifespan."""
    with TestClient(create_app(settings)) as test_client:
        yield test_client
