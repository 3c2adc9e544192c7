"""
Application Exception Handling

Single AppException root for all application errors with FastAPI integration,
plus the catalog error family raised while loading the product catalog.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse


class AppException(Exception):
    """
    Unified application exception for all error scenarios.

    Provides consistent error response format across the entire API.

    Usage:
        raise AppException("Product not found", "PRODUCT_NOT_FOUND", 404)
        raise AppException("Bad entry", "CATALOG_FIELD_ERROR", 500, {"index": 3})

    Error Codes:
        Catalog:
            - CATALOG_UNAVAILABLE (500)
            - CATALOG_PARSE_ERROR (500)
            - CATALOG_FIELD_ERROR (500)
            - CATALOG_DUPLICATE_ID (500)
            - CATALOG_ALREADY_LOADED (500)
            - CATALOG_NOT_LOADED (503)

        Lookup:
            - PRODUCT_NOT_FOUND (404)
    """

    def __init__(
        self,
        message: str,
        code: str,
        status_code: int = 400,
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize application exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code (e.g., "PRODUCT_NOT_FOUND")
            status_code: HTTP status code (default: 400)
            details: Additional error context (optional)
        """
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON response."""
        error_dict = {
            "success": False,
            "error": {
                "code": self.code,
                "message": self.message,
                "timestamp": self.timestamp
            }
        }

        if self.details:
            error_dict["error"]["details"] = self.details

        return error_dict


# ============================================
# CATALOG ERRORS
# ============================================

class CatalogError(AppException):
    """Base class for catalog loading and lifecycle failures."""

    def __init__(
        self,
        message: str,
        code: str = "CATALOG_ERROR",
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, code, status_code, details)


class ResourceUnavailable(CatalogError):
    """The catalog file is missing or cannot be read."""

    def __init__(self, path: str, reason: str):
        super().__init__(
            f"Catalog resource unavailable: {path} ({reason})",
            "CATALOG_UNAVAILABLE",
            details={"path": path, "reason": reason}
        )


class ParseError(CatalogError):
    """The catalog content is not well-formed or has the wrong shape."""

    def __init__(self, reason: str):
        super().__init__(
            f"Catalog could not be parsed: {reason}",
            "CATALOG_PARSE_ERROR",
            details={"reason": reason}
        )


class FieldError(CatalogError):
    """A catalog entry has a missing or invalid field."""

    def __init__(self, index: int, field: Optional[str], reason: str):
        self.index = index
        self.field = field
        location = f"entry {index}" if field is None else f"entry {index}, field '{field}'"
        super().__init__(
            f"Invalid product at {location}: {reason}",
            "CATALOG_FIELD_ERROR",
            details={"index": index, "field": field, "reason": reason}
        )


class DuplicateIdError(CatalogError):
    """Two catalog entries share the same id."""

    def __init__(self, product_id: str, index: int, first_index: int):
        self.product_id = product_id
        self.index = index
        super().__init__(
            f"Duplicate product id '{product_id}' at entry {index} "
            f"(first seen at entry {first_index})",
            "CATALOG_DUPLICATE_ID",
            details={"id": product_id, "index": index, "first_index": first_index}
        )


class CatalogNotReadyError(CatalogError):
    """Lookups were requested before a successful catalog load."""

    def __init__(self, state: str):
        super().__init__(
            "Product catalog not loaded",
            "CATALOG_NOT_LOADED",
            503,
            {"state": state}
        )


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """
    FastAPI exception handler for AppException.

    Converts AppException to consistent JSON error response.
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register all exception handlers with FastAPI app.

    Call this in main.py after creating the FastAPI instance.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(AppException, app_exception_handler)


# ============================================
# CONVENIENCE FACTORY FUNCTIONS
# ============================================

def catalog_already_loaded() -> CatalogError:
    """Create catalog already loaded exception."""
    return CatalogError(
        "Product catalog is loaded once per process",
        "CATALOG_ALREADY_LOADED"
    )


def product_not_found(product_id: str) -> AppException:
    """Create product not found exception."""
    return AppException(
        "Information not found",
        "PRODUCT_NOT_FOUND",
        404,
        {"id": product_id}
    )
