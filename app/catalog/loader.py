"""
==============================================================================
Catalog Loader Module
==============================================================================

Parses the bundled YAML resource into validated Product records.

YAML Structure:
--------------
products:
  - id: "A1"
    name: "Widget"
    price: 9.99
    weight: 0.5

Policies:
---------
- Fail-fast by default: the first malformed entry aborts the load
- ``skip_invalid`` drops malformed entries with a warning instead
- Duplicate ids are rejected unless ``allow_duplicate_ids`` is set,
  in which case lookups return the first match

==============================================================================
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO, Any, Dict, List, Tuple, Union

import yaml
from pydantic import ValidationError

from app.core.exceptions import (
    DuplicateIdError,
    FieldError,
    ParseError,
    ResourceUnavailable,
)
from .models import Product


# Module logger
logger = logging.getLogger(__name__)

PRODUCTS_KEY = "products"
REQUIRED_FIELDS = ("id", "name", "price", "weight")


def _field_error(index: int, exc: ValidationError) -> FieldError:
    """Convert the first pydantic error into a FieldError."""
    first = exc.errors()[0]
    field = str(first["loc"][0]) if first.get("loc") else None
    return FieldError(index, field, first["msg"])


def parse_entry(index: int, entry: Any) -> Product:
    """
    Validate one ``products`` list entry.

    Args:
        index: Position of the entry in the source list
        entry: Raw mapping produced by the YAML parser

    Returns:
        Product

    Raises:
        FieldError: If the entry is not a mapping, a required field is
            missing or null, or a numeric field cannot be parsed
    """
    if not isinstance(entry, dict):
        raise FieldError(index, None, f"expected a mapping, got {type(entry).__name__}")

    for field in REQUIRED_FIELDS:
        if entry.get(field) is None:
            raise FieldError(index, field, "field is required")

    try:
        return Product.model_validate(entry)
    except ValidationError as e:
        raise _field_error(index, e) from e


def _read_products_section(data: Any) -> List[Any]:
    """Extract the raw ``products`` list from a parsed document."""
    if data is None:
        return []

    if not isinstance(data, dict):
        raise ParseError(f"top-level document must be a mapping, got {type(data).__name__}")

    entries = data.get(PRODUCTS_KEY)
    if entries is None:
        return []

    if not isinstance(entries, list):
        raise ParseError(f"'{PRODUCTS_KEY}' must be a list, got {type(entries).__name__}")

    return entries


def load_products(
    stream: Union[IO[str], IO[bytes], str],
    *,
    skip_invalid: bool = False,
    allow_duplicate_ids: bool = False
) -> Tuple[Product, ...]:
    """
    Parse a catalog document into an ordered tuple of products.

    Args:
        stream: Readable text/byte stream or YAML string
        skip_invalid: Drop malformed entries instead of failing
        allow_duplicate_ids: Keep repeated ids (first match wins on lookup)

    Returns:
        Products in source order; empty if ``products`` is absent

    Raises:
        ParseError: If the document is not valid YAML of the expected shape
        FieldError: If an entry is malformed and ``skip_invalid`` is False
        DuplicateIdError: If an id repeats and ``allow_duplicate_ids`` is False
    """
    try:
        data = yaml.safe_load(stream)
    except yaml.YAMLError as e:
        raise ParseError(str(e)) from e

    products: List[Product] = []
    seen: Dict[str, int] = {}

    for index, entry in enumerate(_read_products_section(data)):
        try:
            product = parse_entry(index, entry)
        except FieldError as e:
            if not skip_invalid:
                raise
            logger.warning(f"Skipping invalid product: {e.message}")
            continue

        if product.id in seen and not allow_duplicate_ids:
            raise DuplicateIdError(product.id, index, seen[product.id])
        seen.setdefault(product.id, index)

        products.append(product)

    return tuple(products)


def load_products_from_file(path: Union[Path, str], **options: Any) -> Tuple[Product, ...]:
    """
    Load products from a YAML file.

    The file is closed once the read finishes, whether or not parsing
    succeeded. It is read as bytes so that undecodable content is reported
    by the YAML reader, the same way as for a byte stream.

    Args:
        path: Path to the catalog file
        **options: Forwarded to :func:`load_products`

    Raises:
        ResourceUnavailable: If the file cannot be opened or read
        ParseError: If the content is not valid UTF-8 YAML
    """
    catalog_path = Path(path)
    try:
        with catalog_path.open("rb") as f:
            products = load_products(f, **options)
    except UnicodeDecodeError as e:
        raise ParseError(str(e)) from e
    except OSError as e:
        logger.error(f"Products file not readable: {catalog_path}")
        raise ResourceUnavailable(str(catalog_path), str(e)) from e

    logger.info(f"✅ Loaded {len(products)} products from {catalog_path}")
    return products
