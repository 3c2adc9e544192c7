"""
==============================================================================
Core Package
==============================================================================

Core utilities and infrastructure for the application.

Modules:
--------
- exceptions: AppException class, catalog errors and factory functions
- dependencies: FastAPI dependency injection functions
  (import from ``app.core.dependencies`` directly; it depends on the
  catalog package, which itself depends on ``exceptions``)

Usage:
------
    from app.core import AppException, CatalogError

    from app.core import exceptions
    raise exceptions.product_not_found("A1")

==============================================================================
"""

from .exceptions import (
    AppException,
    CatalogError,
    CatalogNotReadyError,
    DuplicateIdError,
    FieldError,
    ParseError,
    ResourceUnavailable,
    register_exception_handlers,
)

__all__ = [
    "AppException",
    "CatalogError",
    "CatalogNotReadyError",
    "DuplicateIdError",
    "FieldError",
    "ParseError",
    "ResourceUnavailable",
    "register_exception_handlers",
]
