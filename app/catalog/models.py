"""
==============================================================================
Product Models Module
==============================================================================

Pydantic models for product catalog items and scan results.

==============================================================================
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator


NOT_FOUND_MESSAGE = "Information not found"


class Product(BaseModel):
    """
    Product model for catalog items.

    Represents one immutable entry of the product catalog. Scalar ``id`` and
    ``name`` values are coerced to strings; ``price`` and ``weight`` are
    parsed from their string form so ``9.99`` and ``"9.99"`` are equal.

    Attributes:
        id: Lookup key matched against scanned codes
        name: Product display name
        price: Non-negative price
        weight: Non-negative weight
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
    )

    id: str = Field(..., description="Product identifier (scanned code)")
    name: str = Field(..., description="Product name")
    price: Decimal = Field(..., ge=0, description="Product price")
    weight: Decimal = Field(..., ge=0, description="Product weight")

    @field_validator("id", "name", mode="before")
    @classmethod
    def coerce_text(cls, value: Any) -> Any:
        """Stringify scalar values, leaving None for the required check."""
        if value is None or isinstance(value, str):
            return value
        return str(value)

    @field_validator("price", "weight", mode="before")
    @classmethod
    def parse_decimal(cls, value: Any) -> Any:
        """
        Parse a numeric field through its string representation.

        Raises:
            ValueError: If the value is not a finite decimal number
        """
        if value is None:
            return value
        try:
            number = Decimal(str(value).strip())
        except InvalidOperation:
            raise ValueError(f"'{value}' is not a decimal number")
        if not number.is_finite():
            raise ValueError(f"'{value}' is not a finite number")
        return number


class ProductResponse(BaseModel):
    """Product response schema for API endpoints."""

    id: str
    name: str
    price: float
    weight: float

    @classmethod
    def from_product(cls, product: Product) -> "ProductResponse":
        """Create response from Product model."""
        return cls(
            id=product.id,
            name=product.name,
            price=float(product.price),
            weight=float(product.weight)
        )


class ScanResult(BaseModel):
    """Outcome of resolving one scan event against the catalog."""

    model_config = ConfigDict(frozen=True)

    scanned_code: str
    product: Optional[Product] = None
    message: Optional[str] = None

    @computed_field
    @property
    def found(self) -> bool:
        return self.product is not None

    @classmethod
    def for_lookup(cls, scanned_code: str, product: Optional[Product]) -> "ScanResult":
        """Build a result, attaching the not-found message on a miss."""
        if product is None:
            return cls(scanned_code=scanned_code, message=NOT_FOUND_MESSAGE)
        return cls(scanned_code=scanned_code, product=product)

    def to_response(self) -> dict:
        """Serialize for the HTTP and WebSocket surfaces."""
        return {
            "scanned_code": self.scanned_code,
            "found": self.found,
            "product": (
                ProductResponse.from_product(self.product).model_dump()
                if self.product else None
            ),
            "message": self.message
        }
